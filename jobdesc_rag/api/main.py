import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobdesc_rag.api.dependencies import load_all_components
from jobdesc_rag.api.routers import chat_router, job_descriptions_router, system_router
from jobdesc_rag.config.settings import settings
from jobdesc_rag.core.exceptions import (
    DocumentNotFoundError,
    JobDescriptionRAGError,
    SubmissionValidationError,
)
from jobdesc_rag.utils.logging import setup_logger

API_TITLE = "Job Description RAG API"
API_DESCRIPTION = """
Ingests job descriptions through an asynchronous queue, indexes them for
search and answers questions about them with retrieval-augmented chat.
"""
API_VERSION = "1.0.0"

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logger(level=settings.log_level, log_file=settings.log_file)
    logger.info(f"Starting API service with config {settings.describe()}")

    try:
        load_all_components()
    except Exception as e:
        logger.error(f"Error during API initialization: {str(e)}", exc_info=True)

    yield

    logger.info("Shutting down API service")


app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SubmissionValidationError)
async def submission_validation_error_handler(request: Request, exc: SubmissionValidationError):
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": exc.errors})


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()]
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"errors": errors})


@app.exception_handler(DocumentNotFoundError)
async def not_found_error_handler(request: Request, exc: DocumentNotFoundError):
    return JSONResponse(status_code=status.HTTP_404_NOT_FOUND, content={"error": "Job description not found"})


@app.exception_handler(JobDescriptionRAGError)
async def internal_error_handler(request: Request, exc: JobDescriptionRAGError):
    logger.error(f"Unhandled error on {request.url.path}: {str(exc)}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"},
    )


app.include_router(job_descriptions_router, tags=["Job Descriptions"])
app.include_router(chat_router, tags=["Chat"])
app.include_router(system_router, tags=["System"])


@app.get("/", tags=["Root"])
async def root():
    return {
        "message": API_TITLE,
        "version": API_VERSION,
        "docs": "/docs",
    }
