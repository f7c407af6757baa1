"""FastAPI application entrypoint. No business logic; only wiring, middleware and error mapping."""

from dotenv import load_dotenv

load_dotenv()

import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from bgcatalog.api.v1 import router as v1_router
from bgcatalog.core.config import settings
from bgcatalog.core.errors import CatalogError, InternalError, ValidationFailure

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Boardgame Catalog API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

cors_origins = settings.CORS_ORIGINS or (["*"] if settings.APP_ENV == "dev" else [])

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    # Browsers only let scripts read the token header when it is exposed.
    expose_headers=[settings.AUTH_TOKEN_HEADER],
)

app.include_router(v1_router, prefix=settings.API_PREFIX)


def _error_response(error: CatalogError) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content=jsonable_encoder(error.to_body()),
    )


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "Request failed: %s",
            exc.message,
            extra={"path": request.url.path, "error_type": type(exc).__name__},
        )
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return _error_response(ValidationFailure("Badly formatted request", exc.errors()))


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Store access failed", extra={"path": request.url.path})
    return _error_response(InternalError("Internal server error"))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error", extra={"path": request.url.path})
    return _error_response(InternalError("Internal server error"))


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Boardgame Catalog API"}


def run() -> None:
    """Serve the app on the configured port."""
    uvicorn.run("bgcatalog.main:app", host="0.0.0.0", port=settings.PORT)


if __name__ == "__main__":
    run()
