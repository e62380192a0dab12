"""Strict and loose validation of semantic version strings."""

from __future__ import annotations

from dataclasses import dataclass

from smgr.datasource import is_semver
from smgr.version import NUMBERS, contains_only

_MAX_UINT64 = 2**64 - 1


def _parse_strict(version: str) -> None:
    if not is_semver(version):
        raise ValueError("invalid semver")
    head = version.partition("+")[0]
    release, _, prerelease = head.partition("-")
    numbers = release.split(".")
    if prerelease:
        numbers += [part for part in prerelease.split(".") if contains_only(part, NUMBERS)]
    if any(int(number) > _MAX_UINT64 for number in numbers):
        raise ValueError("invalid semver")


@dataclass(frozen=True)
class LooseValidator:
    """Accepts a semantic version with an optional leading ``v``."""

    def is_valid(self, version: str) -> bool:
        """Return True, or raise ValueError if ``version`` is not valid."""
        _parse_strict(version[1:] if version.startswith("v") else version)
        return True


@dataclass(frozen=True)
class StrictValidator:
    """Accepts only exact semantic versions."""

    def is_valid(self, version: str) -> bool:
        """Return True, or raise ValueError if ``version`` is not valid."""
        _parse_strict(version)
        return True


def new_semver_validator(v_type: str) -> LooseValidator | StrictValidator:
    """A validator of type ``loose`` or ``strict``; an empty type means strict."""
    if v_type == "loose":
        return LooseValidator()
    if v_type in ("strict", ""):
        return StrictValidator()
    raise ValueError(f"unknown validator type: {v_type}")


def is_semver_valid(version: str, validator: LooseValidator | StrictValidator) -> bool:
    """Validate ``version`` with ``validator``."""
    return validator.is_valid(version)