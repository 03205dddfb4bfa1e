"""Run the API with uvicorn: ``python -m gym_api``."""

import uvicorn

from gym_api.core.config import settings


def main() -> None:
    """Start the HTTP server on the configured host and port."""
    uvicorn.run(
        "gym_api.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
