"""Version patterns: versions whose parts may be wildcards."""

from __future__ import annotations

from dataclasses import dataclass, field

from smgr.increment import Increment
from smgr.version import (
    ALPHANUM,
    NUMBERS,
    BuildMetadata,
    PRVersion,
    Release,
    Version,
    check_version_digits,
    contains_only,
    parse_build_metadata,
    parse_pr_version,
    parse_release,
)

WILDCARD = "*"


def _absolute_value(value: str) -> str:
    """Replace a wildcard with the lowest value it can stand for."""
    return "0" if value == WILDCARD else value


@dataclass(frozen=True)
class ReleasePattern:
    """The major.minor.patch part of a pattern; each part may be a wildcard."""

    major: str = ""
    minor: str = ""
    patch: str = ""

    def is_strict(self) -> bool:
        """Tell whether no release part is a wildcard."""
        return WILDCARD not in (self.major, self.minor, self.patch)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


@dataclass(frozen=True)
class PRIdentifierPattern:
    """One prerelease identifier of a pattern, or a wildcard."""

    value: str = ""


@dataclass(frozen=True)
class PRVersionPattern:
    """The prerelease part of a pattern."""

    identifiers: tuple[PRIdentifierPattern, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "identifiers", tuple(self.identifiers))


@dataclass(frozen=True)
class BuildIdentifierPattern:
    """One build metadata identifier of a pattern, or a wildcard."""

    value: str = ""


@dataclass(frozen=True)
class BuildMetadataPattern:
    """The build metadata part of a pattern."""

    identifiers: tuple[BuildIdentifierPattern, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "identifiers", tuple(self.identifiers))


@dataclass(frozen=True)
class VersionPattern:
    """A version stream such as ``1.2.*`` or ``*.*.*-alpha.*``."""

    release: ReleasePattern = field(default_factory=ReleasePattern)
    prerelease: PRVersionPattern = field(default_factory=PRVersionPattern)
    build: BuildMetadataPattern = field(default_factory=BuildMetadataPattern)

    def is_release_only_pattern(self) -> bool:
        return not self.is_empty() and not self.prerelease.identifiers

    def is_pr_pattern(self) -> bool:
        return bool(self.prerelease.identifiers)

    def is_empty(self) -> bool:
        return (
            self.release.major == ""
            and self.release.minor == ""
            and self.release.patch == ""
            and not self.prerelease.identifiers
            and not self.build.identifiers
        )

    def first_version(self) -> Version:
        """The lowest version the pattern matches."""
        return Version(
            release=self.first_release(),
            prerelease=self.first_prerelease(),
            build_metadata=self.first_build_metadata(),
        )

    def first_release(self) -> Release:
        raw = ".".join(
            _absolute_value(part)
            for part in (self.release.major, self.release.minor, self.release.patch)
        )
        try:
            return parse_release(raw)
        except ValueError:
            return Release()

    def first_prerelease(self) -> PRVersion:
        raw = ".".join(_absolute_value(ident.value) for ident in self.prerelease.identifiers)
        try:
            return parse_pr_version(raw)
        except ValueError:
            return PRVersion()

    def first_build_metadata(self) -> BuildMetadata:
        raw = ".".join(_absolute_value(ident.value) for ident in self.build.identifiers)
        if raw:
            raw = f"+{raw}"
        try:
            return parse_build_metadata(raw)
        except ValueError:
            return BuildMetadata()

    def __str__(self) -> str:
        text = str(self.release)
        if self.prerelease.identifiers:
            text += "-" + ".".join(ident.value for ident in self.prerelease.identifiers)
        if self.build.identifiers:
            text += "+" + ".".join(ident.value for ident in self.build.identifiers)
        return text


def _parse_digits_pattern(value: str, increment: Increment) -> str:
    if value == WILDCARD:
        return value
    check_version_digits(value, increment)
    return value


def _parse_release_pattern(pattern: str) -> ReleasePattern:
    release = pattern.split("-", 1)[0].split("+", 1)[0]
    tokens = release.split(".", 2)
    levels = (Increment.MAJOR, Increment.MINOR, Increment.PATCH)
    parts = []
    for index, level in enumerate(levels):
        if index >= len(tokens):
            raise ValueError(f"{level} is missing, got: {release}")
        parts.append(_parse_digits_pattern(tokens[index], level))
    return ReleasePattern(*parts)


def _parse_pr_identifier_pattern(value: str) -> PRIdentifierPattern:
    if not value:
        raise ValueError(f"prerelease identifiers MUST NOT be empty, got: {value}")
    if contains_only(value, NUMBERS):
        if len(value) > 1 and value[0] == "0":
            raise ValueError(
                f"prerelease numeric identifiers MUST NOT include leading zeros, got: {value}"
            )
        return PRIdentifierPattern(value)
    if contains_only(value, ALPHANUM) or value == WILDCARD:
        return PRIdentifierPattern(value)
    raise ValueError(
        f"prerelease identifiers MUST contain only alphanumerics and hyphens, got: {value}"
    )


def _parse_build_identifier_pattern(value: str) -> BuildIdentifierPattern:
    if not value:
        raise ValueError(f"build identifiers MUST NOT be empty, got: {value}")
    if contains_only(value, ALPHANUM) or value == WILDCARD:
        return BuildIdentifierPattern(value)
    raise ValueError(
        f"build identifiers MUST contain only alphanumerics and hyphens, got: {value}"
    )


def _parse_prerelease_pattern(pattern: str) -> PRVersionPattern:
    head = pattern.split("+", 1)[0]
    tokens = head.split("-", 1)
    if len(tokens) < 2:
        return PRVersionPattern()
    return PRVersionPattern(
        tuple(_parse_pr_identifier_pattern(part) for part in tokens[1].split("."))
    )


def _parse_build_metadata_pattern(pattern: str) -> BuildMetadataPattern:
    tokens = pattern.split("+", 1)
    if len(tokens) < 2:
        return BuildMetadataPattern()
    return BuildMetadataPattern(
        tuple(_parse_build_identifier_pattern(part) for part in tokens[1].split("."))
    )


def parse_version_pattern(pattern: str) -> VersionPattern:
    """Parse a version pattern, raising ValueError if it is malformed."""
    return VersionPattern(
        release=_parse_release_pattern(pattern),
        prerelease=_parse_prerelease_pattern(pattern),
        build=_parse_build_metadata_pattern(pattern),
    )