"""Upload receiver: validates and persists incoming Word documents"""

import logging
import os
import random
import time
from typing import Iterable

from werkzeug.utils import secure_filename

from services.models import UploadedFile
from utils.storage import StoragePaths
from utils.validators import MAX_FILE_SIZE, WORD_MIMETYPES, validate_word_file

logger = logging.getLogger(__name__)


def generate_upload_name(field_name: str, original_name: str) -> str:
    """
    Build a collision-resistant storage name for an upload

    The name is ``<field>-<epoch millis>-<random int><ext>`` where ``ext`` is
    the extension of the original file name.
    """
    unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}"
    ext = secure_filename(os.path.splitext(original_name)[1].lstrip('.'))
    if ext:
        ext = '.' + ext
    return f"{field_name}-{unique_suffix}{ext}"


def receive_upload(
    file,
    paths: StoragePaths,
    field_name: str = 'file',
    allowed_mimetypes: Iterable[str] = WORD_MIMETYPES,
    max_size: int = MAX_FILE_SIZE,
) -> UploadedFile:
    """
    Validate an uploaded file and write it to the uploads directory

    Args:
        file: werkzeug FileStorage from the multipart request
        paths: Storage layout
        field_name: Form field the file arrived in, used as name prefix
        allowed_mimetypes: Declared MIME types that are accepted
        max_size: Maximum size in bytes

    Returns:
        The persisted UploadedFile

    Raises:
        NoFileUploaded, InvalidFileType, FileTooLarge: Nothing is written
    """
    if file is not None:
        logger.info("Received file: %s Type: %s", file.filename, file.mimetype)

    size = validate_word_file(
        file, allowed_mimetypes=allowed_mimetypes, max_size=max_size
    )

    generated_name = generate_upload_name(field_name, file.filename)
    storage_path = paths.upload_path_for(generated_name)
    try:
        file.save(storage_path)
    except OSError:
        # A partial write must not outlive the request
        if os.path.exists(storage_path):
            try:
                os.remove(storage_path)
                logger.info("Cleaned up partially written upload %s", storage_path)
            except OSError:
                logger.exception("Error deleting uploaded file %s", storage_path)
        raise

    return UploadedFile(
        generated_name=generated_name,
        original_name=file.filename,
        mimetype=file.mimetype,
        size_bytes=size,
        storage_path=storage_path,
    )
