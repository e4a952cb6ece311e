# src/libroteca/api/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from libroteca.core.config import settings
from libroteca.core.exceptions import LibrotecaError, StoreError, ValidationError
from libroteca.db.session import init_db
from libroteca.api.routes import books, reading_list, reviews, users

logging.basicConfig(level=settings.LOG_LEVEL, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initialize database schema on startup
    init_db()
    logger.info(f"Database ready ({settings.ENVIRONMENT})")
    yield

app = FastAPI(title="Libroteca", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.list_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(books.router)
app.include_router(reviews.router)
app.include_router(reading_list.router)
app.include_router(users.router)


def _field_name(loc) -> str:
    # Drop the leading "body"/"query"/"path" marker
    parts = [str(part) for part in loc[1:]] or [str(part) for part in loc]
    return ".".join(parts)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = {_field_name(error["loc"]): error["msg"] for error in exc.errors()}
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request data", "errors": errors},
    )


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "errors": exc.errors},
    )


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    # Already logged with traceback where it was raised
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


@app.exception_handler(LibrotecaError)
async def domain_error_handler(request: Request, exc: LibrotecaError):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.message})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


@app.get("/")
async def root():
    return {"status": "ok", "message": "Libroteca API"}
