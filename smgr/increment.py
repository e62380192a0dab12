"""Increment levels and the error raised for empty version lists."""

from __future__ import annotations

from enum import Enum


class EmptyVersionListError(Exception):
    """Raised when an operation needs at least one version and gets none."""

    def __init__(self, message: str = "error: version list is empty") -> None:
        super().__init__(message)


class Increment(str, Enum):
    """The level at which a version is incremented."""

    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    NONE = "none"

    def __str__(self) -> str:
        return self.value

    def validate(self) -> None:
        """Raise ValueError unless this is a major, minor or patch increment."""
        if self not in (Increment.MAJOR, Increment.MINOR, Increment.PATCH):
            raise ValueError("invalid increment type")

    def is_higher_than(self, compared_to: Increment) -> bool:
        """Tell whether this increment outranks ``compared_to``."""
        if self is Increment.MAJOR:
            return compared_to is Increment.MAJOR
        if self is Increment.MINOR:
            return compared_to is Increment.PATCH
        return False