from collections.abc import Callable
from datetime import date
from urllib.parse import urlparse

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kycdoc.api.routes import router
from kycdoc.config.settings import Settings
from kycdoc.database.base import BaseSubmissionStore
from kycdoc.database.factory import SubmissionStoreFactory
from kycdoc.logging.logger import Log
from kycdoc.notifications.notifier import StatusNotifier
from kycdoc.ocr.base import BaseTextExtractor
from kycdoc.processor.confirmation import IdentityConfirmer
from kycdoc.processor.file_store import FileStore
from kycdoc.processor.processor import build_date_parser, build_processor
from kycdoc.validation.validator import KycValidator


def validate_cors_origins(origins_str: str) -> list[str]:
    """Split a comma-separated origin list, dropping anything that is not an http(s) URL."""
    origins = [origin.strip() for origin in origins_str.split(",") if origin.strip()]
    validated: list[str] = []
    for origin in origins:
        parsed = urlparse(origin)
        if parsed.scheme in {"http", "https"} and parsed.netloc:
            validated.append(origin)
        else:
            Log.warning(f"Invalid CORS origin '{origin}' ignored")
    return validated


def create_app(
    settings: Settings,
    *,
    store: BaseSubmissionStore | None = None,
    text_extractor: BaseTextExtractor | None = None,
    today: Callable[[], date] = date.today,
) -> FastAPI:
    """Wire the pipeline components and mount the KYC routes."""
    store = store if store is not None else SubmissionStoreFactory.create(settings)
    notifier = StatusNotifier()

    app = FastAPI(title="kycdoc", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=validate_cors_origins(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.settings = settings
    app.state.store = store
    app.state.notifier = notifier
    app.state.file_store = FileStore(settings.files_root)
    app.state.processor = build_processor(
        settings,
        notifier=notifier,
        store=store,
        text_extractor=text_extractor,
        today=today,
    )
    app.state.confirmer = IdentityConfirmer(
        store, build_date_parser(settings, today), KycValidator()
    )
    app.include_router(router)
    return app
