from __future__ import annotations

from fastapi import APIRouter

from attest.config import settings
from attest.rendering import RendererRegistry
from attest.version import APP_VERSION


def build_system_router(*, registry: RendererRegistry) -> APIRouter:
    router = APIRouter()

    @router.get("/")
    def root() -> dict[str, str]:
        return {"service": "attest-backend", "status": "running"}

    @router.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok", "environment": settings.app_env}

    @router.get("/ready")
    def ready() -> dict[str, object]:
        return {
            "status": "ready",
            "environment": settings.app_env,
            "version": APP_VERSION,
            "checks": {"renderers": {"ok": bool(registry.available()), "available": registry.available()}},
        }

    return router
