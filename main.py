from nepali_relay.logging_config import setup_logging
from nepali_relay.routes import create_app
from nepali_relay.settings import settings


# Configure logging once for the whole process.
setup_logging()

# FastAPI application instance for uvicorn.
app = create_app()


def run() -> None:
    import uvicorn

    # Use our own logging configuration from nepali_relay.logging_config.
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    run()
