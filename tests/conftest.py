"""Shared fixtures for the conversion service tests."""
import io
from pathlib import Path

import pytest

from app import create_app
from utils.storage import StoragePaths, ensure_storage_dirs

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
DOC_MIME = "application/msword"
PDF_HEADER = b"%PDF-1.4\n"


def fake_pdf_converter(input_path, output_path):
    """Stand-in for LibreOffice: writes a tiny PDF derived from the input."""
    Path(output_path).write_bytes(PDF_HEADER + Path(input_path).read_bytes()[:32])


def word_upload(content=b"PK\x03\x04 fake docx", filename="report.docx", mimetype=DOCX_MIME):
    """Multipart form data for the ``file`` field."""
    return {"file": (io.BytesIO(content), filename, mimetype)}


@pytest.fixture
def storage_paths(tmp_path):
    paths = StoragePaths(
        upload_dir=str(tmp_path / "uploads"),
        output_dir=str(tmp_path / "output"),
    )
    ensure_storage_dirs(paths)
    return paths


@pytest.fixture
def make_app(storage_paths):
    """Build an app bound to temporary folders with a chosen converter."""
    def _make(converter=fake_pdf_converter):
        flask_app = create_app({
            "TESTING": True,
            "UPLOAD_FOLDER": storage_paths.upload_dir,
            "OUTPUT_FOLDER": storage_paths.output_dir,
            "CONVERTER": converter,
        })
        return flask_app
    return _make


@pytest.fixture
def client(make_app):
    return make_app().test_client()
