from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Protocol

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from ..common.datetime_utils import epoch_millis
from ..core.enums import AttachmentKind
from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)


class AttachmentStore(Protocol):
    def save(self, kind: AttachmentKind, upload: Optional[FileStorage]) -> Optional[str]:
        raise NotImplementedError

    def discard(self, relative_path: str) -> None:
        raise NotImplementedError


class AttachmentStorage(AttachmentStore):
    """Stores uploaded attachments under ``<root>/uploads/{photos,documents}``.

    Files are named ``<epoch_ms>_<filename>``; the returned relative path is
    what gets persisted on the employee record.
    """

    def __init__(self, root: Path, *, clock: Callable[[], int] = epoch_millis):
        self._root = Path(root)
        self._clock = clock

    @property
    def root(self) -> Path:
        return self._root

    def save(self, kind: AttachmentKind, upload: Optional[FileStorage]) -> Optional[str]:
        if upload is None:
            return None
        data = upload.read()
        if not data:
            return None

        filename = secure_filename(upload.filename or "") or kind.value
        relative_path = f"{kind.directory}/{self._clock()}_{filename}"
        target = self._root / relative_path
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)
        except OSError as exc:
            logger.error("Could not write %s attachment to %s: %s", kind.value, target, exc)
            raise StorageError(f"Could not store {kind.value}") from exc

        logger.info("Stored %s attachment at %s (%d bytes)", kind.value, relative_path, len(data))
        return relative_path

    def discard(self, relative_path: str) -> None:
        target = self._root / relative_path
        try:
            target.unlink()
        except FileNotFoundError:
            return
        except OSError:
            logger.exception("Could not remove orphaned attachment %s", relative_path)
            return
        logger.info("Removed orphaned attachment %s", relative_path)
