"""Data models for Tutorial API."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class TutorialCreate(BaseModel):
    """Tutorial creation data."""
    title: Optional[str] = Field(None, description="Tutorial title (required, checked by the handler)")
    description: Optional[str] = Field(None, description="Tutorial description")
    published: bool = Field(False, description="Whether the tutorial is published")

    class Config:
        json_schema_extra = {
            "example": {
                "title": "FastAPI basics",
                "description": "Building a CRUD API with FastAPI and MongoDB"
            }
        }


class TutorialUpdate(BaseModel):
    """Tutorial update data. Only fields present in the request are written."""
    title: Optional[str] = None
    description: Optional[str] = None
    published: Optional[bool] = None

    class Config:
        json_schema_extra = {
            "example": {
                "published": True
            }
        }


class Tutorial(BaseModel):
    """Stored tutorial."""
    id: str = Field(..., description="Document id")
    title: Optional[str] = None
    description: Optional[str] = None
    published: bool = False
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None


class MessageResponse(BaseModel):
    """Plain message response, also used for errors."""
    message: str = Field(..., description="Response message")

    class Config:
        json_schema_extra = {
            "example": {
                "message": "Tutorial was updated successfully."
            }
        }
