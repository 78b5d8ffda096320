"""FastAPI application entry point."""

from fastapi import FastAPI

import config.settings as settings
from reviewboard.api.routes import router


def create_app() -> FastAPI:
    """Build the dashboard API application."""
    application = FastAPI(title=settings.API_TITLE)
    application.include_router(router)
    return application


app = create_app()
