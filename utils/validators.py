"""File validation utilities"""

import os
from typing import Iterable

from utils.errors import FileTooLarge, InvalidFileType, NoFileUploaded

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB

WORD_MIMETYPES = (
    'application/msword',
    'application/vnd.openxmlformats-officedocument.wordprocessingml.document',
)


def validate_word_file(
    file,
    allowed_mimetypes: Iterable[str] = WORD_MIMETYPES,
    max_size: int = MAX_FILE_SIZE,
) -> int:
    """
    Validate an uploaded Word document

    Args:
        file: File object from Flask request
        allowed_mimetypes: Declared MIME types that are accepted
        max_size: Maximum size in bytes (inclusive)

    Returns:
        Size of the file in bytes

    Raises:
        NoFileUploaded: If no file was sent
        InvalidFileType: If the declared MIME type is not a Word type
        FileTooLarge: If the file exceeds max_size
    """
    if not file or not file.filename:
        raise NoFileUploaded()

    if file.mimetype not in allowed_mimetypes:
        raise InvalidFileType(file.mimetype)

    # Check file size
    file.stream.seek(0, os.SEEK_END)
    file_size = file.stream.tell()
    file.stream.seek(0)  # Reset file pointer

    if file_size > max_size:
        raise FileTooLarge()

    return file_size
