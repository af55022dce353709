"""VM incompatibility reasons reported by ``Compare-VM``.

Six message ids have named reasons; any other id maps to :class:`Other`,
which keeps the original code. ``classify(code, msg).message_id == code``
holds for every input.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar


@dataclass(frozen=True)
class IncompatibilityReason(ABC):
    """Base for all reasons. ``message`` is the text Hyper-V reported."""

    message: str

    @property
    @abstractmethod
    def message_id(self) -> int:
        """Numeric Hyper-V message id."""

    @property
    def reason(self) -> str:
        """Variant name, used for display and JSON output."""
        return type(self).__name__

    def to_dict(self) -> dict[str, object]:
        return {
            "reason": self.reason,
            "message_id": self.message_id,
            "message": self.message,
        }


@dataclass(frozen=True)
class _KnownReason(IncompatibilityReason):
    MESSAGE_ID: ClassVar[int]

    @property
    def message_id(self) -> int:
        return self.MESSAGE_ID


@dataclass(frozen=True)
class CannotCreateExternalConfigStore(_KnownReason):
    MESSAGE_ID: ClassVar[int] = 13000


@dataclass(frozen=True)
class TooManyCores(_KnownReason):
    MESSAGE_ID: ClassVar[int] = 14420


@dataclass(frozen=True)
class CannotChangeCheckpointLocation(_KnownReason):
    MESSAGE_ID: ClassVar[int] = 16350


@dataclass(frozen=True)
class CannotChangeSmartPagingStore(_KnownReason):
    MESSAGE_ID: ClassVar[int] = 16352


@dataclass(frozen=True)
class CannotRestoreSavedState(_KnownReason):
    MESSAGE_ID: ClassVar[int] = 25014


@dataclass(frozen=True)
class MissingSwitch(_KnownReason):
    MESSAGE_ID: ClassVar[int] = 33012


@dataclass(frozen=True)
class Other(IncompatibilityReason):
    """Any message id without a named reason."""

    code: int

    @property
    def message_id(self) -> int:
        return self.code


KNOWN_REASONS: dict[int, type[_KnownReason]] = {
    cls.MESSAGE_ID: cls
    for cls in (
        CannotCreateExternalConfigStore,
        TooManyCores,
        CannotChangeCheckpointLocation,
        CannotChangeSmartPagingStore,
        CannotRestoreSavedState,
        MissingSwitch,
    )
}


def classify(code: int, message: str) -> IncompatibilityReason:
    """Map a ``Compare-VM`` message id to its typed reason."""
    reason_cls = KNOWN_REASONS.get(code)
    if reason_cls is None:
        return Other(message, code)
    return reason_cls(message)
