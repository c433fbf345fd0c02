"""Command line entry for the patch bridge."""

from __future__ import annotations

import uvicorn

from patchbridge.core.config import settings
from patchbridge.core.observability import configure_logging


def run_server() -> None:
    configure_logging()
    uvicorn.run("patchbridge.api.main:app", host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())


def main() -> None:
    run_server()


if __name__ == "__main__":
    main()
