"""Upload lifecycle: convert a received upload, respond, clean up"""

import logging
import os
from datetime import datetime, timezone
from typing import Tuple

from services.conversion_service import Converter, convert, convert_docx_to_pdf
from services.models import (
    ConversionResult,
    LifecycleState,
    ResponseMetadata,
    UploadedFile,
)
from utils.errors import ConversionError
from utils.storage import StoragePaths

logger = logging.getLogger(__name__)


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


class UploadLifecycle:
    """Sequences one request's receive -> convert -> respond -> cleanup.

    An instance is created per request from an already persisted upload and
    is single use. ``run()`` either returns the response metadata
    (``completed``) or raises ConversionError (``failed``); the uploaded
    file is removed in both cases. Removal is best effort: a failed delete
    is logged and never changes the outcome.
    """

    def __init__(
        self,
        uploaded: UploadedFile,
        paths: StoragePaths,
        converter: Converter = convert_docx_to_pdf,
    ):
        self.uploaded = uploaded
        self.paths = paths
        self.converter = converter
        self.state = LifecycleState.RECEIVED

    def _transition(self, state: LifecycleState) -> None:
        logger.info("%s: %s -> %s", self.uploaded.generated_name, self.state.value, state.value)
        self.state = state

    @property
    def output_filename(self) -> str:
        base_name = os.path.splitext(self.uploaded.generated_name)[0]
        return base_name + '.pdf'

    async def run(self) -> Tuple[ResponseMetadata, ConversionResult]:
        if self.state is not LifecycleState.RECEIVED:
            raise RuntimeError(f"Lifecycle already ran (state: {self.state.value})")

        self._transition(LifecycleState.CONVERTING)
        output_path = self.paths.output_path_for(self.output_filename)

        try:
            logger.info("Starting conversion of %s", self.uploaded.storage_path)
            result = await convert(self.uploaded.storage_path, output_path, self.converter)
        except ConversionError:
            self._transition(LifecycleState.FAILED)
            logger.exception("Error occurred during file processing")
            self._cleanup("after error")
            raise

        logger.info("Conversion completed: %s", result.output_path)
        self._transition(LifecycleState.COMPLETED)
        self._cleanup("after conversion")

        metadata = ResponseMetadata(
            original_name=self.uploaded.original_name,
            size_bytes=self.uploaded.size_bytes,
            mimetype=self.uploaded.mimetype,
            upload_time=_utc_timestamp(),
            download_url=f"/download/{result.output_filename}",
            file_url=f"/output/{result.output_filename}",
        )
        return metadata, result

    def _cleanup(self, reason: str) -> None:
        try:
            os.remove(self.uploaded.storage_path)
            logger.info("Cleaned up uploaded file %s", reason)
        except OSError:
            logger.exception("Error deleting uploaded file %s", self.uploaded.storage_path)
