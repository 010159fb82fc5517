"""Request and response schemas for the ShopSafe API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AnalyzeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    video_base64: str | None = Field(
        None, alias="videoBase64", description="Base64 encoded video bytes"
    )
    mime_type: str = Field("video/mp4", alias="mimeType", description="Declared video type")
    caption: str = Field("", description="Caption / description text")
    script: str = Field("", description="Spoken script text")


class CaptionTestRequest(BaseModel):
    caption: str = Field(..., description="Caption to check")


class ErrorResponse(BaseModel):
    detail: str
