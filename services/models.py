"""Records passed between the upload, conversion and lifecycle services"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any


class LifecycleState(str, Enum):
    RECEIVED = "received"
    CONVERTING = "converting"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class UploadedFile:
    generated_name: str
    original_name: str
    mimetype: str
    size_bytes: int
    storage_path: str


@dataclass(frozen=True)
class ConversionResult:
    output_path: str
    output_filename: str


@dataclass(frozen=True)
class ResponseMetadata:
    original_name: str
    size_bytes: int
    mimetype: str
    upload_time: str
    download_url: str
    file_url: str

    def to_dict(self) -> Dict[str, Any]:
        """Metadata block of the upload response."""
        return {
            'name': self.original_name,
            'size': self.size_bytes,
            'type': self.mimetype,
            'uploadTime': self.upload_time,
        }
