"""Error types raised by the upload and conversion services"""

from werkzeug.exceptions import BadRequest, NotFound


class NoFileUploaded(BadRequest):
    description = "No file uploaded"


class InvalidFileType(BadRequest):
    def __init__(self, mimetype: str):
        super().__init__(
            f"Invalid file type: {mimetype}. Only Word documents are allowed."
        )
        self.mimetype = mimetype


class FileTooLarge(BadRequest):
    description = "File is too large. Maximum size is 10MB"


class OutputNotFound(NotFound):
    description = "File not found"


class ConversionError(Exception):
    """Raised when the external conversion tool fails.

    ``str(error)`` is the tool's own message, kept unmodified so it can be
    returned to the client as diagnostic detail.
    """
