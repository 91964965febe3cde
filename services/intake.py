"""
Upload Intake - Picks the audio upload out of a multipart form.
"""

from typing import Tuple

from starlette.datastructures import FormData, UploadFile

from core.constants import UPLOAD_FIELD_NAME
from core.errors import (
    NoFileUploadedError,
    TooManyFilesError,
    UnexpectedFieldError,
    UnsupportedMediaTypeError,
)
from core.logger import logger
from core.messages import LogMessages
from services.media_types import is_accepted_audio


def extract_audio_upload(form: FormData) -> Tuple[str, UploadFile]:
    """
    Find the single file uploaded under UPLOAD_FIELD_NAME.

    Returns:
        (field_name, upload)

    Raises:
        UnexpectedFieldError: If any file was sent under another field
        NoFileUploadedError: If the form carries no file
        TooManyFilesError: If the form carries more than one file
        UnsupportedMediaTypeError: If the file fails the audio filter
    """
    files = [
        (name, value) for name, value in form.multi_items() if isinstance(value, UploadFile)
    ]

    stray = [name for name, _ in files if name != UPLOAD_FIELD_NAME]
    if stray:
        logger.warning(
            LogMessages.UPLOAD_REJECTED.format(reason=f"file under field '{stray[0]}'")
        )
        raise UnexpectedFieldError()

    if not files:
        logger.warning(LogMessages.UPLOAD_REJECTED.format(reason="no file"))
        raise NoFileUploadedError()

    if len(files) > 1:
        logger.warning(
            LogMessages.UPLOAD_REJECTED.format(reason=f"{len(files)} files in one request")
        )
        raise TooManyFilesError()

    field_name, upload = files[0]
    if not is_accepted_audio(field_name, upload.content_type, upload.filename):
        logger.warning(
            LogMessages.UPLOAD_REJECTED.format(
                reason=f"not audio (field={field_name}, "
                f"content_type={upload.content_type}, filename={upload.filename})"
            )
        )
        raise UnsupportedMediaTypeError()

    return field_name, upload
