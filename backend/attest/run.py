"""Serve the API: ``python -m attest.run`` or the ``attest-api`` script."""

import uvicorn

from attest.config import settings


def main() -> None:
    uvicorn.run(
        "attest.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=settings.app_env == "development",
    )


if __name__ == "__main__":
    main()
