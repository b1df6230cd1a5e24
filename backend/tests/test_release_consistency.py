from __future__ import annotations

import importlib.util
from pathlib import Path
from types import ModuleType


REPO_ROOT = Path(__file__).resolve().parents[2]
SCRIPT_PATH = REPO_ROOT / "scripts" / "check_release_consistency.py"


def _load_script() -> ModuleType:
    spec = importlib.util.spec_from_file_location("check_release_consistency_module", SCRIPT_PATH)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _write_repo(root: Path, *, app_version: str, project_version: str) -> None:
    package = root / "backend" / "attest"
    package.mkdir(parents=True)
    (package / "version.py").write_text(f'APP_VERSION = "{app_version}"\n', encoding="utf-8")
    (package / "main.py").write_text(
        "from attest.version import APP_VERSION\napp = FastAPI(title='x', version=APP_VERSION)\n",
        encoding="utf-8",
    )
    (root / "pyproject.toml").write_text(
        f'[build-system]\nrequires = ["setuptools"]\n\n[project]\nname = "attest"\nversion = "{project_version}"\n',
        encoding="utf-8",
    )


def test_repository_versions_are_consistent(capsys) -> None:
    assert _load_script().main([str(REPO_ROOT)]) == 0
    assert "[OK]" in capsys.readouterr().out


def test_mismatched_project_version_is_reported(tmp_path: Path) -> None:
    _write_repo(tmp_path, app_version="1.2.3", project_version="1.2.4")
    version, errors = _load_script().collect_errors(tmp_path)
    assert version == "1.2.3"
    assert errors == ["pyproject.toml version '1.2.4' does not match APP_VERSION '1.2.3'."]


def test_non_semver_app_version_is_reported(tmp_path: Path) -> None:
    _write_repo(tmp_path, app_version="1.2", project_version="1.2")
    _, errors = _load_script().collect_errors(tmp_path)
    assert errors == ["APP_VERSION must follow X.Y.Z semantic versioning, found: 1.2"]
