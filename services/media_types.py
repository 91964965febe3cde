"""
Media type helpers for uploaded audio.
"""

from pathlib import PurePath
from typing import Optional

from core.constants import (
    ACCEPTED_AUDIO_EXTENSIONS,
    EXTENSION_CONTENT_TYPES,
    FALLBACK_AUDIO_CONTENT_TYPE,
    GENERIC_CONTENT_TYPE,
    UPLOAD_FIELD_NAME,
)


def file_extension(filename: Optional[str]) -> str:
    """Lower-cased extension of a filename including the dot, or ''."""
    if not filename:
        return ""
    return PurePath(filename).suffix.lower()


def resolve_content_type(declared: Optional[str], filename: Optional[str]) -> str:
    """
    Resolve the media type to send upstream.

    The declared type wins unless it is missing or the generic
    application/octet-stream placeholder; then the filename extension decides,
    falling back to audio/wav.

    Examples:
        >>> resolve_content_type("audio/webm", "clip.mp3")
        'audio/webm'
        >>> resolve_content_type("application/octet-stream", "clip.M4A")
        'audio/mp4'
        >>> resolve_content_type(None, "clip")
        'audio/wav'
    """
    if declared and declared != GENERIC_CONTENT_TYPE:
        return declared
    return EXTENSION_CONTENT_TYPES.get(
        file_extension(filename), FALLBACK_AUDIO_CONTENT_TYPE
    )


def is_accepted_audio(
    field_name: Optional[str],
    content_type: Optional[str],
    filename: Optional[str],
) -> bool:
    """
    Intake filter for uploaded files.

    A file passes if its declared type is audio/*, it was sent under the
    expected upload field, or its extension is a known audio extension.
    """
    if content_type and content_type.lower().startswith("audio/"):
        return True
    if field_name == UPLOAD_FIELD_NAME:
        return True
    return file_extension(filename) in ACCEPTED_AUDIO_EXTENSIONS
