"""Request payload models sent to the compliance model."""

from enum import Enum

from pydantic import BaseModel, Field, model_validator


class EncodedMedia(BaseModel):
    """Media bytes as base64 text, ready to embed in a JSON request."""

    data: str = Field(..., description="Standard base64 encoding of the file bytes")
    mime_type: str = Field("video/mp4", description="Declared media type")
    original_name: str | None = Field(None, description="Source file name")

    @property
    def size_bytes(self) -> int:
        """Decoded size, computed from the base64 length."""
        padding = self.data[-2:].count("=")
        return len(self.data) * 3 // 4 - padding


class PartKind(str, Enum):
    """Kind of content part."""

    TEXT = "text"
    INLINE_DATA = "inline_data"


class ContentPart(BaseModel):
    """One part of a multi-part model request."""

    kind: PartKind
    text: str | None = None
    inline_data: EncodedMedia | None = None

    @model_validator(mode="after")
    def _check_payload(self) -> "ContentPart":
        if self.kind is PartKind.TEXT and self.text is None:
            raise ValueError("text part requires text")
        if self.kind is PartKind.INLINE_DATA and self.inline_data is None:
            raise ValueError("inline_data part requires inline_data")
        return self

    @classmethod
    def from_text(cls, text: str) -> "ContentPart":
        return cls(kind=PartKind.TEXT, text=text)

    @classmethod
    def from_media(cls, media: EncodedMedia) -> "ContentPart":
        return cls(kind=PartKind.INLINE_DATA, inline_data=media)


class AnalysisRequest(BaseModel):
    """Inputs of a full analysis. At least one must be present to run."""

    media: EncodedMedia | None = None
    caption: str = ""
    script: str = ""

    @property
    def has_caption(self) -> bool:
        return bool(self.caption.strip())

    @property
    def has_script(self) -> bool:
        return bool(self.script.strip())

    @property
    def has_content(self) -> bool:
        """Whether media, caption or script was provided."""
        return self.media is not None or self.has_caption or self.has_script
