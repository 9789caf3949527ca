"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from formspace.api.v1.api import api_router
from formspace.db.database import close_db, init_db
from formspace.errors import ErrorKind, FormspaceError
from formspace.settings import settings
from formspace.utils import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging("formspace")
    init_db()
    logger.info(f"Formspace API started (environment={settings.environment})")
    yield
    close_db()


app = FastAPI(
    title="Formspace API",
    description="Form builder backend: workspaces, sharing and response collection",
    version="0.1.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(FormspaceError)
async def formspace_error_handler(request: Request, exc: FormspaceError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


HTTP_STATUS_KINDS = {
    400: ErrorKind.invalid_input,
    401: ErrorKind.unauthorized,
    403: ErrorKind.unauthorized,
    404: ErrorKind.not_found,
    405: ErrorKind.invalid_input,
    409: ErrorKind.conflict,
}


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    kind = HTTP_STATUS_KINDS.get(exc.status_code, ErrorKind.internal)
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "kind": kind.value},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"{location}: {first.get('msg')}" if location else str(first.get("msg", "Invalid request"))
    logger.warning(f"{request.method} {request.url.path} rejected: {message}")
    return JSONResponse(
        status_code=400,
        content={
            "detail": message,
            "kind": ErrorKind.invalid_input.value,
            "errors": jsonable_encoder(errors),
        },
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"{request.method} {request.url.path} database error: {exc}")
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal database error", "kind": ErrorKind.internal.value},
    )


# Include routers
app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    """Service banner."""
    return {
        "status": "ok",
        "service": "Formspace API",
        "version": "0.1.0",
    }


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "formspace.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
