#!/usr/bin/env python3
"""Validate that the package version agrees across the runtime and packaging metadata."""

from __future__ import annotations

import re
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _parse_app_version(version_text: str) -> str | None:
    match = re.search(r'^APP_VERSION\s*=\s*"([^"]+)"\s*$', version_text, flags=re.MULTILINE)
    if not match:
        return None
    return match.group(1).strip()


def _parse_project_version(pyproject_text: str) -> str | None:
    in_project = False
    for line in pyproject_text.splitlines():
        stripped = line.strip()
        if stripped.startswith("["):
            in_project = stripped == "[project]"
            continue
        if in_project:
            match = re.fullmatch(r'version\s*=\s*"([^"]+)"', stripped)
            if match:
                return match.group(1).strip()
    return None


def _validate_semver(version: str) -> bool:
    return re.fullmatch(r"\d+\.\d+\.\d+", version) is not None


def collect_errors(repo_root: Path) -> tuple[str, list[str]]:
    version_file = repo_root / "backend" / "attest" / "version.py"
    main_file = repo_root / "backend" / "attest" / "main.py"
    pyproject_file = repo_root / "pyproject.toml"

    errors = [f"Missing file: {path}" for path in (version_file, main_file, pyproject_file) if not path.exists()]
    if errors:
        return "unknown", errors

    app_version = _parse_app_version(_read(version_file))
    if app_version is None:
        errors.append(f"Could not parse APP_VERSION from {version_file}")
        app_version = "unknown"
    elif not _validate_semver(app_version):
        errors.append(f"APP_VERSION must follow X.Y.Z semantic versioning, found: {app_version}")

    project_version = _parse_project_version(_read(pyproject_file))
    if project_version != app_version:
        errors.append(f"pyproject.toml version {project_version!r} does not match APP_VERSION {app_version!r}.")

    main_text = _read(main_file)
    if "from attest.version import APP_VERSION" not in main_text:
        errors.append("backend/attest/main.py must import APP_VERSION from attest.version.")
    if re.search(r"FastAPI\([^)]*version\s*=\s*APP_VERSION", main_text, flags=re.DOTALL) is None:
        errors.append("backend/attest/main.py must set FastAPI version=APP_VERSION.")
    return app_version, errors


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    repo_root = Path(args[0]) if args else REPO_ROOT
    app_version, errors = collect_errors(repo_root)
    if errors:
        for error in errors:
            print(f"[ERROR] {error}")
        return 1

    print(f"[OK] Release consistency checks passed for v{app_version}.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
