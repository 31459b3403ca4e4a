"""Tutorial API - Main application."""

import logging
from contextlib import asynccontextmanager
from typing import List, Optional
from fastapi import FastAPI, Depends, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request as StarletteRequest

from .config import settings
from .database import MODEL_FACTORIES, get_registry, get_tutorials
from .models import MessageResponse, Tutorial, TutorialCreate, TutorialUpdate
from .tutorial_model import TutorialModel
from common.database.mongodb import connect_to_mongo, close_database_connection
from common.database.registry import Registry, build_registry
from common.health.checks import health_check, readiness_check, liveness_check

# Configure logging
logging.basicConfig(
    level=logging.INFO if not settings.debug else logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")

    registry = build_registry(settings.mongo_uri, MODEL_FACTORIES)

    if settings.uses_default_mongo_uri:
        logger.warning(f"MONGO_URI is not set, using default {registry.url}")

    try:
        await connect_to_mongo(registry)
    except Exception as e:
        logger.error(f"Cannot connect to the database! {e}")
        await close_database_connection(registry)
        raise

    app.state.db = registry
    logger.info(f"{settings.app_name} started successfully")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")
    app.state.db = None
    await close_database_connection(registry)


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="CRUD API for tutorials",
    lifespan=lifespan
)

# Custom middleware to handle OPTIONS requests
class CORSPreflightMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: StarletteRequest, call_next):
        if request.method == "OPTIONS":
            origin = request.headers.get("origin", "")
            if origin in cors_origins:
                return JSONResponse(
                    content={},
                    status_code=200,
                    headers={
                        "Access-Control-Allow-Origin": origin,
                        "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
                        "Access-Control-Allow-Headers": "Content-Type, Authorization, Accept",
                        "Access-Control-Allow-Credentials": "true",
                        "Access-Control-Max-Age": "3600",
                    }
                )
        response = await call_next(request)
        return response

# Configure CORS
cors_origins = [origin.strip() for origin in settings.cors_origins.split(',')]
logger.info(f"CORS origins configured: {cors_origins}")

# Add custom OPTIONS handler first
app.add_middleware(CORSPreflightMiddleware)

# Then add standard CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization", "Accept"],
    max_age=3600,
)


def message(status_code: int, text: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": text})


# Health check endpoints
@app.get("/health", include_in_schema=False)
async def health():
    """Health check endpoint."""
    return await health_check(service_name=settings.app_name)


@app.get("/ready", include_in_schema=False)
async def ready(registry: Registry = Depends(get_registry)):
    """Readiness check endpoint."""
    return await readiness_check(registry)


@app.get("/live", include_in_schema=False)
async def live():
    """Liveness check endpoint."""
    return await liveness_check()


# API Endpoints
@app.post(
    "/api/tutorials",
    response_model=Tutorial,
    status_code=status.HTTP_200_OK,
    summary="Create a tutorial",
    tags=["Tutorials"]
)
async def create_tutorial(
    tutorial: Optional[TutorialCreate] = None,
    tutorials: TutorialModel = Depends(get_tutorials)
):
    """
    Create and save a new tutorial.

    Returns 400 if the body or the title is missing or empty.
    """
    if tutorial is None or not tutorial.title:
        return message(status.HTTP_400_BAD_REQUEST, "Content can not be empty!")

    try:
        return await tutorials.create(tutorial.model_dump())
    except Exception as e:
        logger.error(f"Error creating tutorial: {e}")
        return message(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Some error occurred while creating the Tutorial."
        )


@app.get(
    "/api/tutorials",
    response_model=List[Tutorial],
    summary="List tutorials",
    tags=["Tutorials"]
)
async def list_tutorials(
    title: Optional[str] = None,
    tutorials: TutorialModel = Depends(get_tutorials)
):
    """
    Retrieve all tutorials.

    Query parameter:
    - title: Optional pattern, matched case-insensitively against titles
    """
    try:
        return await tutorials.find_all(title=title)
    except Exception as e:
        logger.error(f"Error retrieving tutorials: {e}")
        return message(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Some error occurred while retrieving tutorials."
        )


@app.get(
    "/api/tutorials/published",
    response_model=List[Tutorial],
    summary="List published tutorials",
    tags=["Tutorials"]
)
async def list_published_tutorials(tutorials: TutorialModel = Depends(get_tutorials)):
    try:
        return await tutorials.find_published()
    except Exception as e:
        logger.error(f"Error retrieving published tutorials: {e}")
        return message(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Some error occurred while retrieving tutorials."
        )


@app.get(
    "/api/tutorials/{tutorial_id}",
    response_model=Tutorial,
    responses={404: {"model": MessageResponse}},
    summary="Get a tutorial",
    tags=["Tutorials"]
)
async def get_tutorial(
    tutorial_id: str,
    tutorials: TutorialModel = Depends(get_tutorials)
):
    try:
        tutorial = await tutorials.find_by_id(tutorial_id)
    except Exception as e:
        logger.error(f"Error retrieving tutorial {tutorial_id}: {e}")
        return message(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"Error retrieving Tutorial with id={tutorial_id}"
        )

    if tutorial is None:
        return message(status.HTTP_404_NOT_FOUND, f"Not found Tutorial with id {tutorial_id}")
    return tutorial


@app.put(
    "/api/tutorials/{tutorial_id}",
    response_model=MessageResponse,
    responses={400: {"model": MessageResponse}, 404: {"model": MessageResponse}},
    summary="Update a tutorial",
    tags=["Tutorials"]
)
async def update_tutorial(
    tutorial_id: str,
    tutorial: Optional[TutorialUpdate] = None,
    tutorials: TutorialModel = Depends(get_tutorials)
):
    """
    Update a tutorial by id.

    Only the fields present in the request body are written.
    """
    if tutorial is None or not tutorial.model_fields_set:
        return message(status.HTTP_400_BAD_REQUEST, "Data to update can not be empty!")

    try:
        updated = await tutorials.update_by_id(tutorial_id, tutorial.model_dump(exclude_unset=True))
    except Exception as e:
        logger.error(f"Error updating tutorial {tutorial_id}: {e}")
        return message(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"Error updating Tutorial with id={tutorial_id}"
        )

    if updated is None:
        return message(
            status.HTTP_404_NOT_FOUND,
            f"Cannot update Tutorial with id={tutorial_id}. Maybe Tutorial was not found!"
        )

    logger.info(f"Tutorial updated: id={tutorial_id}")
    return MessageResponse(message="Tutorial was updated successfully.")


@app.delete(
    "/api/tutorials/{tutorial_id}",
    response_model=MessageResponse,
    responses={404: {"model": MessageResponse}},
    summary="Delete a tutorial",
    tags=["Tutorials"]
)
async def delete_tutorial(
    tutorial_id: str,
    tutorials: TutorialModel = Depends(get_tutorials)
):
    try:
        deleted = await tutorials.delete_by_id(tutorial_id)
    except Exception as e:
        logger.error(f"Error deleting tutorial {tutorial_id}: {e}")
        return message(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            f"Could not delete Tutorial with id={tutorial_id}"
        )

    if not deleted:
        return message(
            status.HTTP_404_NOT_FOUND,
            f"Cannot delete Tutorial with id={tutorial_id}. Maybe Tutorial was not found!"
        )

    logger.info(f"Tutorial deleted: id={tutorial_id}")
    return MessageResponse(message="Tutorial was deleted successfully!")


@app.delete(
    "/api/tutorials",
    response_model=MessageResponse,
    summary="Delete all tutorials",
    tags=["Tutorials"]
)
async def delete_all_tutorials(tutorials: TutorialModel = Depends(get_tutorials)):
    try:
        count = await tutorials.delete_all()
    except Exception as e:
        logger.error(f"Error deleting all tutorials: {e}")
        return message(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Some error occurred while removing all tutorials."
        )

    return MessageResponse(message=f"{count} Tutorials were deleted successfully!")


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint."""
    return {
        "message": "Welcome to the tutorial application.",
        "service": settings.app_name,
        "version": settings.app_version
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
