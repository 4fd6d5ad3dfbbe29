"""
FastAPI REST API for the bootcamp directory.

Bootcamps, courses, reviews and users backed by MongoDB.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo import MongoClient

from bootcamp_api.adapters.mongodb import ensure_indexes
from bootcamp_api.container import ServiceContainer
from bootcamp_api.core.config import Settings
from bootcamp_api.core.errors import BootcampApiError
from bootcamp_api.core.logging_config import configure_logging
from bootcamp_api.routes import api_router

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    container: Optional[ServiceContainer] = None,
) -> FastAPI:
    """
    Build the application.

    Args:
        settings: Settings to use; read from the environment when omitted
        container: Pre-built services; when omitted a MongoDB connection is
            opened on startup and closed on shutdown

    Returns:
        Configured FastAPI app
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if getattr(app.state, "container", None) is not None:
            yield
            return

        client: MongoClient = MongoClient(settings.mongo_uri)
        database = client[settings.mongo_database]
        ensure_indexes(database)
        app.state.container = ServiceContainer.from_mongodb(database, settings)
        logger.info("Connected to MongoDB database '%s'", settings.mongo_database)
        try:
            yield
        finally:
            client.close()

    app = FastAPI(
        title="Bootcamp Directory API",
        description="Bootcamps, courses, reviews and users with filtered, paginated listings",
        version="1.0.0",
        lifespan=lifespan,
    )
    if container is not None:
        app.state.container = container

    @app.exception_handler(BootcampApiError)
    async def handle_api_error(request: Request, exc: BootcampApiError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = [
            f"{'.'.join(str(part) for part in err['loc'][1:]) or 'body'}: {err['msg']}"
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=400, content={"success": False, "error": "; ".join(messages)}
        )

    app.include_router(api_router)
    return app


if __name__ == "__main__":
    import uvicorn

    settings = Settings.from_env()
    uvicorn.run(create_app(settings), host=settings.api_host, port=settings.api_port)
