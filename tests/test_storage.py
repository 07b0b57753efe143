"""Tests for the upload/output directory layout."""
import os

from utils.storage import StoragePaths, ensure_storage_dirs


def test_creates_missing_directories(tmp_path):
    paths = StoragePaths(
        upload_dir=str(tmp_path / "a" / "uploads"),
        output_dir=str(tmp_path / "b" / "output"),
    )

    created = ensure_storage_dirs(paths)

    assert created == [paths.upload_dir, paths.output_dir]
    assert os.path.isdir(paths.upload_dir)
    assert os.path.isdir(paths.output_dir)


def test_existing_directories_left_alone(storage_paths):
    marker = os.path.join(storage_paths.output_dir, "kept.pdf")
    with open(marker, "wb") as f:
        f.write(b"%PDF")

    assert ensure_storage_dirs(storage_paths) == []
    assert os.path.exists(marker)


def test_path_helpers(storage_paths):
    assert storage_paths.upload_path_for("x.docx") == os.path.join(storage_paths.upload_dir, "x.docx")
    assert storage_paths.output_path_for("x.pdf") == os.path.join(storage_paths.output_dir, "x.pdf")
