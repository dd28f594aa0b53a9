from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class VideoRequest(BaseModel):
    prompt: Optional[str] = Field(default=None, description="Text prompt describing the video")


class GenerationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    prompt: str = Field(..., min_length=1)


class ErrorResponse(BaseModel):
    error: Any


class HealthResponse(BaseModel):
    status: str
