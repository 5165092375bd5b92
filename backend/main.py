"""
Users API
CRUD over a single user resource, served from memory and optionally
mirrored to MongoDB or a JSON file.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from api.routes import health_router, users_router
from config import Settings, get_settings
from repositories import MirrorProtocol, build_mirror
from services import UserService
from store import RecordStore

logger = logging.getLogger(__name__)

CORS_METHODS = "GET, POST, PUT, DELETE, OPTIONS"
CORS_HEADERS = "Content-Type, Authorization"


def create_app(
    settings: Optional[Settings] = None,
    mirror: Optional[MirrorProtocol] = None,
) -> FastAPI:
    """Build the app. ``mirror`` overrides the one selected by USERS_MIRROR."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        active = mirror if mirror is not None else build_mirror(settings)
        service = UserService(RecordStore(), active, mirror_updates=settings.MIRROR_UPDATES)
        try:
            service.load_from_mirror()
            if active is not None and not service.mirror_updates:
                logger.info("Update mirroring is off: updates stay in memory only")
            app.state.users = service
            yield
        finally:
            if active is not None:
                active.close()

    app = FastAPI(title=settings.APP_TITLE, version=settings.APP_VERSION, lifespan=lifespan)

    @app.middleware("http")
    async def cors(request: Request, call_next):
        if request.method == "OPTIONS":
            response = Response(status_code=200)
        else:
            response = await call_next(request)
        response.headers["Access-Control-Allow-Origin"] = settings.ALLOWED_ORIGIN
        response.headers["Access-Control-Allow-Methods"] = CORS_METHODS
        response.headers["Access-Control-Allow-Headers"] = CORS_HEADERS
        return response

    @app.exception_handler(RequestValidationError)
    async def invalid_payload(request: Request, exc: RequestValidationError):
        logger.debug("Rejected payload on %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse({"detail": "Invalid request payload"}, status_code=400)

    app.include_router(health_router)
    app.include_router(users_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    s = get_settings()
    uvicorn.run("main:app", host=s.HOST, port=s.PORT)
