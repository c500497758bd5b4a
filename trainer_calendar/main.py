from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from trainer_calendar.api.router import api_router
from trainer_calendar.core.config import get_settings
from trainer_calendar.core.exceptions import AuthenticationError, BackendError
from trainer_calendar.core.logging_config import setup_logging


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.environment)

    app = FastAPI(title=settings.app_name)
    app.include_router(api_router, prefix=settings.api_prefix)

    @app.exception_handler(AuthenticationError)
    async def authentication_error_handler(request: Request, exc: AuthenticationError):
        return JSONResponse(status_code=401, content={"detail": exc.message})

    @app.exception_handler(BackendError)
    async def backend_error_handler(request: Request, exc: BackendError):
        # Pass the backend's own client errors through; anything else is a bad gateway.
        status_code = exc.status_code if exc.status_code and 400 <= exc.status_code < 500 else 502
        return JSONResponse(status_code=status_code, content={"detail": exc.message})

    @app.get("/health")
    def health():
        return {"ok": True}

    return app


app = create_app()
