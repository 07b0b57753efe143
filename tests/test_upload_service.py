"""Tests for upload validation and persistence."""
import io
import os
import re

import pytest
from werkzeug.datastructures import FileStorage

from conftest import DOC_MIME, DOCX_MIME
from services.upload_service import generate_upload_name, receive_upload
from utils.errors import FileTooLarge, InvalidFileType, NoFileUploaded
from utils.validators import MAX_FILE_SIZE, validate_word_file


def _file(content=b"docx bytes", filename="report.docx", content_type=DOCX_MIME):
    return FileStorage(
        stream=io.BytesIO(content), filename=filename, name="file", content_type=content_type
    )


class TestValidateWordFile:
    @pytest.mark.parametrize("mimetype", [DOC_MIME, DOCX_MIME])
    def test_word_types_accepted(self, mimetype):
        assert validate_word_file(_file(content=b"abc", content_type=mimetype)) == 3

    @pytest.mark.parametrize("mimetype", ["image/png", "application/pdf", "text/plain"])
    def test_other_types_rejected(self, mimetype):
        with pytest.raises(InvalidFileType) as exc_info:
            validate_word_file(_file(content_type=mimetype))

        assert exc_info.value.mimetype == mimetype
        assert mimetype in exc_info.value.description

    def test_size_limit_is_inclusive(self):
        assert validate_word_file(_file(content=b"x" * MAX_FILE_SIZE)) == MAX_FILE_SIZE

        with pytest.raises(FileTooLarge):
            validate_word_file(_file(content=b"x" * (MAX_FILE_SIZE + 1)))

    def test_stream_rewound_after_size_check(self):
        file = _file(content=b"abcdef")
        validate_word_file(file)

        assert file.stream.read() == b"abcdef"

    def test_missing_file(self):
        with pytest.raises(NoFileUploaded):
            validate_word_file(None)

    def test_empty_filename(self):
        with pytest.raises(NoFileUploaded):
            validate_word_file(_file(filename=""))


class TestGenerateUploadName:
    def test_shape_keeps_extension(self):
        name = generate_upload_name("file", "Quarterly Report.docx")

        assert re.fullmatch(r"file-\d+-\d+\.docx", name)

    def test_without_extension(self):
        assert re.fullmatch(r"file-\d+-\d+", generate_upload_name("file", "README"))

    def test_unicode_name_keeps_extension(self):
        assert generate_upload_name("file", "отчёт.doc").endswith(".doc")

    def test_names_differ(self):
        names = {generate_upload_name("file", "a.docx") for _ in range(50)}

        assert len(names) == 50


class TestReceiveUpload:
    def test_persists_exactly_one_file(self, storage_paths):
        uploaded = receive_upload(_file(content=b"payload"), storage_paths)

        assert os.listdir(storage_paths.upload_dir) == [uploaded.generated_name]
        assert uploaded.storage_path == os.path.join(storage_paths.upload_dir, uploaded.generated_name)
        assert uploaded.original_name == "report.docx"
        assert uploaded.mimetype == DOCX_MIME
        assert uploaded.size_bytes == 7
        with open(uploaded.storage_path, "rb") as f:
            assert f.read() == b"payload"

    def test_rejected_upload_writes_nothing(self, storage_paths):
        with pytest.raises(InvalidFileType):
            receive_upload(_file(filename="image.png", content_type="image/png"), storage_paths)

        assert os.listdir(storage_paths.upload_dir) == []

    def test_failed_write_leaves_nothing_behind(self, storage_paths, monkeypatch):
        def failing_save(self, dst, buffer_size=16384):
            with open(dst, "wb") as f:
                f.write(b"part")
            raise OSError("disk full")

        monkeypatch.setattr(FileStorage, "save", failing_save)

        with pytest.raises(OSError, match="disk full"):
            receive_upload(_file(), storage_paths)

        assert os.listdir(storage_paths.upload_dir) == []
