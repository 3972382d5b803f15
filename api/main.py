import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from core import db, settings
from schools import ranking
from schools import router as schools_router
from schools.repository import SchoolRepository

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    config = settings.load_settings()
    strategy = ranking.get_strategy(config.ranking_strategy)

    database = db.Database(
        config.database_url,
        min_size=config.pool_min_size,
        max_size=config.pool_max_size,
        command_timeout=config.command_timeout_s,
    )
    await database.connect()
    try:
        repository = SchoolRepository(database)
        await repository.ensure_schema()
        logger.info("schools_table_ready ranking_strategy=%s", strategy.name)

        app.state.school_repository = repository
        app.state.ranking_strategy = strategy
        yield
    finally:
        await database.close()


async def validation_error_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    # Report every violated constraint, not just the first.
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"errors": jsonable_encoder(exc.errors())},
    )


def create_app() -> FastAPI:
    app = FastAPI(title="school-locator", lifespan=lifespan)

    # Allow configured browser front-ends to call this API.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins(),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    app.include_router(schools_router.router, tags=["schools"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.get("/")
    def root() -> dict:
        return {"message": "school-locator api"}

    return app


app = create_app()


def serve() -> None:
    uvicorn.run("main:app", host=settings.server_host(), port=settings.server_port())


if __name__ == "__main__":
    serve()
