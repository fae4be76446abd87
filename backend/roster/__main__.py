"""Run the API with uvicorn: ``python -m roster``."""

import uvicorn

from roster.core.config import settings


def main() -> None:
    uvicorn.run(
        "roster.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.APP_ENV == "development",
        log_config=None,
    )


if __name__ == "__main__":
    main()
