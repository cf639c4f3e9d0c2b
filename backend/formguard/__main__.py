"""Run the API server: ``python -m formguard``."""

import uvicorn

from formguard.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "formguard.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    main()
