"""Run the API server with uvicorn: ``python -m animecards``."""
from __future__ import annotations

from uvicorn import run

from animecards.core.config import get_settings


def main() -> None:
    settings = get_settings()
    run(
        "animecards.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level,
    )


if __name__ == "__main__":
    main()
