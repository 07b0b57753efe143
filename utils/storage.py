"""Upload and output directory layout"""

import logging
import os
from dataclasses import dataclass
from typing import List

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoragePaths:
    upload_dir: str
    output_dir: str

    def upload_path_for(self, filename: str) -> str:
        return os.path.join(self.upload_dir, filename)

    def output_path_for(self, filename: str) -> str:
        return os.path.join(self.output_dir, filename)


def ensure_storage_dirs(paths: StoragePaths) -> List[str]:
    """
    Create the upload and output directories if they are missing

    Args:
        paths: Directory layout to bootstrap

    Returns:
        Directories that were created by this call
    """
    created = []
    for directory in (paths.upload_dir, paths.output_dir):
        if not os.path.isdir(directory):
            os.makedirs(directory, exist_ok=True)
            logger.info("Created directory: %s", directory)
            created.append(directory)
    return created
