# server/main.py

import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from api import auth, tasks
from core.config import Settings, get_settings
from core.errors import AppError, UnauthorizedError
from core.logging_setup import setup_logging
from database import build_engine, build_session_factory, init_db


logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    engine = build_engine(settings.database_url)
    init_db(engine)

    app = FastAPI(title="task-manager")
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(AppError)
    def handle_app_error(request: Request, exc: AppError):
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
        return JSONResponse(
            status_code=exc.status_code,
            content={"status": "error", "error": exc.kind, "message": exc.message},
            headers=headers,
        )

    app.include_router(auth.router)
    app.include_router(tasks.router)

    logger.info("Application ready, database %s", engine.url.render_as_string(hide_password=True))
    return app
