import uvicorn

from contactbook.core.config import settings


def main() -> None:
    uvicorn.run(
        "contactbook.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
