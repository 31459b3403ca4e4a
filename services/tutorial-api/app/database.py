"""Model registration table and FastAPI database dependencies."""

from typing import Dict

from fastapi import Depends, Request

from common.database.registry import ModelFactory, Registry
from .tutorial_model import TutorialModel, create_tutorial_model

MODEL_FACTORIES: Dict[str, ModelFactory] = {
    "tutorials": create_tutorial_model,
}


def get_registry(request: Request) -> Registry:
    """
    Get the registry built at startup.

    Raises:
        RuntimeError: If the application has not started
    """
    registry = getattr(request.app.state, "db", None)
    if registry is None:
        raise RuntimeError("Database registry is not initialized. Is the application started?")
    return registry


def get_tutorials(registry: Registry = Depends(get_registry)) -> TutorialModel:
    return registry.model("tutorials")
