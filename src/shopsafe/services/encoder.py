"""Payload encoding: media to base64 and multi-part request assembly."""

import base64
import logging
import mimetypes
from pathlib import Path

from shopsafe.errors import MediaReadError
from shopsafe.models.request import AnalysisRequest, ContentPart, EncodedMedia

logger = logging.getLogger(__name__)

DEFAULT_MEDIA_TYPE = "video/mp4"

ANALYSIS_INSTRUCTION = "Analyze this TikTok Shop content for compliance."
CAPTION_TEST_INSTRUCTION = "Analyze this caption for TikTok Shop compliance: {caption}"


def guess_mime_type(path: Path) -> str:
    """Guess a media type from the file name, defaulting to MP4."""
    mime, _ = mimetypes.guess_type(path.name)
    return mime or DEFAULT_MEDIA_TYPE


def encode_media_bytes(
    data: bytes,
    mime_type: str = DEFAULT_MEDIA_TYPE,
    original_name: str | None = None,
) -> EncodedMedia:
    """Encode raw bytes as standard base64 text."""
    return EncodedMedia(
        data=base64.b64encode(data).decode("ascii"),
        mime_type=mime_type,
        original_name=original_name,
    )


def encode_media_file(path: Path, mime_type: str | None = None) -> EncodedMedia:
    """Read a whole media file and encode it.

    Args:
        path: Local media file.
        mime_type: Declared media type. Guessed from the suffix when omitted.

    Returns:
        EncodedMedia carrying the base64 text and media type.

    Raises:
        MediaReadError: If the file cannot be read.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise MediaReadError(f"Could not read media file {path}: {exc}") from exc

    logger.debug("Encoded %s (%d bytes)", path.name, len(data))
    return encode_media_bytes(
        data,
        mime_type=mime_type or guess_mime_type(path),
        original_name=path.name,
    )


def decode_media(media: EncodedMedia) -> bytes:
    """Reverse of :func:`encode_media_bytes`."""
    return base64.b64decode(media.data, validate=True)


def build_analysis_parts(request: AnalysisRequest) -> list[ContentPart]:
    """Assemble the parts of a full analysis request.

    Only provided inputs produce a part; an empty script adds nothing.
    """
    parts = [ContentPart.from_text(ANALYSIS_INSTRUCTION)]
    if request.media is not None:
        parts.append(ContentPart.from_media(request.media))
    if request.has_caption:
        parts.append(ContentPart.from_text(f"CAPTION: {request.caption}"))
    if request.has_script:
        parts.append(ContentPart.from_text(f"SCRIPT: {request.script}"))
    return parts


def build_caption_parts(caption: str) -> list[ContentPart]:
    """Assemble the single-part caption test request."""
    return [ContentPart.from_text(CAPTION_TEST_INSTRUCTION.format(caption=caption))]
