import io

import pytest
from werkzeug.datastructures import FileStorage

from src.employee_timesheets.employee_timesheets.core.enums import AttachmentKind
from src.employee_timesheets.employee_timesheets.core.exceptions import StorageError
from src.employee_timesheets.employee_timesheets.uploads.storage import AttachmentStorage


def _upload(name, payload=b"\x89PNG data"):
    return FileStorage(stream=io.BytesIO(payload), filename=name)


def test_save_writes_under_kind_directory_with_millisecond_prefix(tmp_path):
    storage = AttachmentStorage(tmp_path, clock=lambda: 1718000000123)

    path = storage.save(AttachmentKind.PHOTO, _upload("face.png"))

    assert path == "uploads/photos/1718000000123_face.png"
    assert (tmp_path / path).read_bytes() == b"\x89PNG data"


def test_documents_go_to_their_own_directory(tmp_path):
    storage = AttachmentStorage(tmp_path, clock=lambda: 5)
    assert storage.save(AttachmentKind.DOCUMENT, _upload("cv.pdf")) == "uploads/documents/5_cv.pdf"


def test_absent_or_empty_upload_returns_none(tmp_path):
    storage = AttachmentStorage(tmp_path)
    assert storage.save(AttachmentKind.PHOTO, None) is None
    assert storage.save(AttachmentKind.PHOTO, _upload("", b"")) is None
    assert not (tmp_path / "uploads").exists()


def test_filename_is_sanitized(tmp_path):
    storage = AttachmentStorage(tmp_path, clock=lambda: 7)
    assert storage.save(AttachmentKind.DOCUMENT, _upload("../../etc/passwd")) == "uploads/documents/7_etc_passwd"
    assert storage.save(AttachmentKind.PHOTO, _upload("../..")) == "uploads/photos/7_photo"


def test_discard_removes_file_and_tolerates_missing(tmp_path):
    storage = AttachmentStorage(tmp_path, clock=lambda: 1)
    path = storage.save(AttachmentKind.PHOTO, _upload("a.png"))

    storage.discard(path)
    storage.discard(path)

    assert not (tmp_path / path).exists()


def test_write_failure_raises_storage_error(tmp_path):
    blocker = tmp_path / "blocked"
    blocker.write_text("not a directory")
    storage = AttachmentStorage(blocker)

    with pytest.raises(StorageError):
        storage.save(AttachmentKind.PHOTO, _upload("a.png"))
