import uvicorn

from kycdoc.api.app import create_app
from kycdoc.config.settings import Settings
from kycdoc.database.connection import close_pool, init_pool
from kycdoc.logging.logger import Log


def main() -> None:
    """Entry point: initialize pool -> build app -> serve HTTP and WebSocket traffic."""
    settings = Settings()
    Log.configure(settings.log_level)
    if settings.persistence_backend == "postgres":
        init_pool(settings)

    try:
        app = create_app(settings)
        Log.info(f"Starting KYC API on {settings.api_host}:{settings.api_port}")
        uvicorn.run(app, host=settings.api_host, port=settings.api_port)
    finally:
        close_pool()


if __name__ == "__main__":
    main()
