"""Semantic versions: parsing, formatting and precedence."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from smgr.increment import Increment

NUMBERS = "0123456789"
ALPHAS = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ-"
ALPHANUM = ALPHAS + NUMBERS

_MAX_UINT64 = 2**64 - 1


def contains_only(s: str, charset: str) -> bool:
    """Tell whether every character of ``s`` is in ``charset``."""
    return all(char in charset for char in s)


def _numeric_value(identifier: str) -> int:
    if not identifier:
        return 0
    return min(int(identifier), _MAX_UINT64)


@dataclass(frozen=True)
class Release:
    """The major.minor.patch part of a version."""

    major: int = 0
    minor: int = 0
    patch: int = 0

    def is_equal_to(self, other: Release) -> bool:
        return self == other

    def is_higher_than(self, other: Release) -> bool:
        return (self.major, self.minor, self.patch) > (other.major, other.minor, other.patch)

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"


@dataclass(frozen=True)
class PRIdentifier:
    """One dot-separated identifier of a prerelease."""

    value: str = ""

    def is_equal_to(self, other: PRIdentifier) -> bool:
        return self.value == other.value

    def is_higher_than(self, other: PRIdentifier) -> bool:
        if contains_only(self.value, NUMBERS) and contains_only(other.value, NUMBERS):
            return _numeric_value(self.value) > _numeric_value(other.value)
        return self.value > other.value

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class BuildIdentifier:
    """One dot-separated identifier of build metadata."""

    value: str = ""

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PRVersion:
    """The prerelease part of a version."""

    identifiers: tuple[PRIdentifier, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "identifiers", tuple(self.identifiers))

    def is_equal_to(self, other: PRVersion) -> bool:
        return self.identifiers == other.identifiers

    def is_higher_than(self, other: PRVersion) -> bool:
        for mine, theirs in zip(self.identifiers, other.identifiers):
            if not mine.is_equal_to(theirs):
                return mine.is_higher_than(theirs)
        return len(self.identifiers) > len(other.identifiers)

    def last_id(self) -> PRIdentifier:
        return self.identifiers[-1] if self.identifiers else PRIdentifier()

    def __str__(self) -> str:
        text = ".".join(identifier.value for identifier in self.identifiers)
        return f"-{text}" if text else ""


@dataclass(frozen=True)
class BuildMetadata:
    """The build metadata part of a version."""

    identifiers: tuple[BuildIdentifier, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "identifiers", tuple(self.identifiers))

    def __str__(self) -> str:
        text = ".".join(identifier.value for identifier in self.identifiers)
        return f"+{text}" if text else ""


@dataclass(frozen=True)
class Version:
    """A semantic version."""

    release: Release = field(default_factory=Release)
    prerelease: PRVersion = field(default_factory=PRVersion)
    build_metadata: BuildMetadata = field(default_factory=BuildMetadata)

    def is_release(self) -> bool:
        return not self.prerelease.identifiers

    def is_equal_to(self, other: Version) -> bool:
        """Compare release and prerelease; build metadata is ignored."""
        return self.release.is_equal_to(other.release) and self.prerelease.is_equal_to(
            other.prerelease
        )

    def is_higher_than(self, other: Version) -> bool:
        if self.release.is_higher_than(other.release):
            return True
        if self.is_release() and not other.is_release():
            return True
        if other.is_release() and not self.is_release():
            return False
        return self.prerelease.is_higher_than(other.prerelease)

    def __str__(self) -> str:
        return f"{self.release}{self.prerelease}{self.build_metadata}"


def check_version_digits(value: str, increment: Increment | str) -> None:
    """Raise ValueError unless ``value`` is a well-formed release number."""
    try:
        level = Increment(increment)
    except ValueError:
        level = None
    if level not in (Increment.MAJOR, Increment.MINOR, Increment.PATCH):
        raise ValueError(
            f"increment MUST be one of {Increment.MAJOR}, {Increment.MINOR}, "
            f"or {Increment.PATCH}, got: {increment}"
        )
    if not value:
        raise ValueError(f"{level} MUST NOT be empty, got: {value}")
    if not contains_only(value, NUMBERS):
        raise ValueError(f"{level} MUST comprise only ASCII numerics [0-9], got: {value}")
    if len(value) > 1 and value[0] == "0":
        raise ValueError(f"{level} MUST NOT contain leading zeroes, got: {value}")


def _release_number(release: str, index: int, increment: Increment) -> int:
    tokens = release.split(".", 2)
    if index >= len(tokens):
        raise ValueError(f"{increment} is missing, got: {release}")
    value = tokens[index]
    check_version_digits(value, increment)
    number = int(value)
    if number > _MAX_UINT64:
        raise ValueError(f"{increment} value out of range, got: {value}")
    return number


def parse_release(v: str) -> Release:
    """Parse the major.minor.patch part of ``v``."""
    release = v.split("-", 1)[0].split("+", 1)[0]
    return Release(
        major=_release_number(release, 0, Increment.MAJOR),
        minor=_release_number(release, 1, Increment.MINOR),
        patch=_release_number(release, 2, Increment.PATCH),
    )


def parse_pr_identifier(v: str) -> PRIdentifier:
    """Parse one prerelease identifier."""
    if not v:
        raise ValueError(f"prerelease identifiers MUST NOT be empty, got: {v}")
    if contains_only(v, NUMBERS):
        if len(v) > 1 and v[0] == "0":
            raise ValueError(
                f"prerelease numeric identifiers MUST NOT include leading zeros, got: {v}"
            )
        return PRIdentifier(v)
    if contains_only(v, ALPHANUM):
        return PRIdentifier(v)
    raise ValueError(
        "prerelease identifiers MUST comprise only ASCII alphanumerics and hyphens "
        f"[0-9-Za-z-], got: {v}"
    )


def parse_build_identifier(v: str) -> BuildIdentifier:
    """Parse one build metadata identifier."""
    if not v:
        raise ValueError(f"build identifiers MUST NOT be empty, got: {v}")
    if not contains_only(v, ALPHANUM):
        raise ValueError(
            "build identifiers MUST comprise only ASCII alphanumerics and hyphens "
            f"[0-9-Za-z-], got: {v}"
        )
    return BuildIdentifier(v)


def parse_pr_version(raw_prerelease: str) -> PRVersion:
    """Parse a dot-separated prerelease."""
    return PRVersion(tuple(parse_pr_identifier(part) for part in raw_prerelease.split(".")))


def parse_build_metadata(metadata: str) -> BuildMetadata:
    """Parse dot-separated build metadata."""
    return BuildMetadata(tuple(parse_build_identifier(part) for part in metadata.split(".")))


def get_version_components(v: str) -> tuple[str, str, str]:
    """Split ``v`` into its raw release, prerelease and build metadata strings."""
    head, _, build = v.partition("+")
    release, _, prerelease = head.partition("-")
    return release, prerelease, build


def parse_version(v: str) -> Version:
    """Parse a semantic version string, raising ValueError if it is malformed."""
    raw_release, raw_prerelease, raw_build = get_version_components(v)
    release = parse_release(raw_release)
    prerelease = parse_pr_version(raw_prerelease) if raw_prerelease else PRVersion()
    build = parse_build_metadata(raw_build) if raw_build else BuildMetadata()
    return Version(release, prerelease, build)


def split_versions(string_versions: str) -> list[str]:
    """Split a list of versions separated by commas or, failing that, spaces."""
    string_versions = string_versions.strip()
    if "," in string_versions:
        return string_versions.replace(" ", "").split(",")
    return string_versions.split(" ")


def parse_versions(v_list: str) -> list[Version]:
    """Parse every version in a comma or space separated list."""
    return [parse_version(raw) for raw in split_versions(v_list)]


def format_versions(versions: Iterable[Version]) -> str:
    """Join versions with single spaces."""
    return " ".join(str(version) for version in versions)