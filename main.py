from fastapi import FastAPI, Request
from contextlib import asynccontextmanager
from fastapi.responses import JSONResponse
from hanzimaster.core.config import settings
from hanzimaster.core.credentials import credential_store
from hanzimaster.core.logging import get_logger, setup_logging
from hanzimaster.apis.decks.main import router as decks_router
from hanzimaster.apis.review.main import router as review_router
from hanzimaster.apis.settings.main import router as settings_router
from hanzimaster.modules.decks.errors import (
    AuthorizationError,
    ClassificationError,
    DeckError,
    GenerationError,
    TransportError,
)
from hanzimaster.modules.review.state import (
    EmptyDeckError,
    SessionBusyError,
    review_manager,
)

import uvicorn
from fastapi.middleware.cors import CORSMiddleware

logger = get_logger(__name__)

ERROR_STATUS = {
    ClassificationError: 422,
    GenerationError: 502,
    TransportError: 502,
    AuthorizationError: 401,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    credential_store.load()
    review_manager.start(
        idle_seconds=settings.review.idle_seconds,
        sweep_interval=settings.review.sweep_interval,
    )
    try:
        yield
    finally:
        await review_manager.stop()


async def _deck_error_handler(request: Request, exc: DeckError) -> JSONResponse:
    status_code = ERROR_STATUS.get(type(exc), 400)
    logger.info("%s on %s: %s", exc.kind, request.url.path, exc.message)
    content = {"detail": exc.message, "error": exc.kind}
    if exc.details is not None:
        content["errors"] = exc.details
    return JSONResponse(status_code=status_code, content=content)


async def _empty_deck_handler(request: Request, exc: EmptyDeckError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc), "error": exc.kind})


async def _busy_handler(request: Request, exc: SessionBusyError) -> JSONResponse:
    return JSONResponse(status_code=409, content={"detail": str(exc), "error": exc.kind})


def create_app() -> FastAPI:
    setup_logging()
    app = FastAPI(
        title=settings.app.name, version=settings.app.version, lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.app.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(DeckError, _deck_error_handler)
    app.add_exception_handler(EmptyDeckError, _empty_deck_handler)
    app.add_exception_handler(SessionBusyError, _busy_handler)

    app.include_router(decks_router)
    app.include_router(review_router)
    app.include_router(settings_router)

    @app.get("/")
    async def root():
        return {
            "status": "ok",
            "app": settings.app.name,
            "version": settings.app.version,
        }

    return app


app = create_app()


if __name__ == "__main__":
    try:
        uvicorn.run(
            "main:app",
            host="0.0.0.0",
            port=settings.app.port,
            reload=not settings.app.is_production,
        )
    except Exception as e:
        print(f"An error occurred when starting the server: {e}.")
