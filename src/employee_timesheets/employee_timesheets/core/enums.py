from __future__ import annotations

from enum import Enum
from typing import Optional

from .constants import DOCUMENTS_DIR, PHOTOS_DIR


class SortOrder(str, Enum):
    """Sort direction accepted by list views."""

    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortOrder":
        if value and value.strip().lower() == "desc":
            return cls.DESC
        return cls.ASC

    @property
    def flipped(self) -> "SortOrder":
        return SortOrder.ASC if self is SortOrder.DESC else SortOrder.DESC


class AttachmentKind(str, Enum):
    """Binary attachment slots of an employee record."""

    PHOTO = "photo"
    DOCUMENT = "document"

    @property
    def directory(self) -> str:
        return PHOTOS_DIR if self is AttachmentKind.PHOTO else DOCUMENTS_DIR
