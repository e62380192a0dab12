"""Computing the next version of a stream."""

from __future__ import annotations

import dataclasses
import re
from typing import Iterable

from smgr.filters import get_highest_stream_version, get_highest_stream_version_with_releases
from smgr.increment import EmptyVersionListError, Increment
from smgr.pattern import VersionPattern, parse_version_pattern
from smgr.version import NUMBERS, PRIdentifier, PRVersion, Release, Version, contains_only

_UINT64_LIMIT = 2**64
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_INTEGER = re.compile(r"[+-]?[0-9]+")


def is_numerical(s: str) -> bool:
    """Tell whether ``s`` is a signed 64-bit decimal integer."""
    if not _INTEGER.fullmatch(s):
        return False
    return _INT64_MIN <= int(s) <= _INT64_MAX


def increment_version(
    source_versions: Iterable[Version],
    stream_pattern: VersionPattern | None,
    increment: Increment | str,
) -> Version:
    """The next version on ``stream_pattern`` after ``source_versions``."""
    if stream_pattern is None or stream_pattern.is_empty():
        stream_pattern = parse_version_pattern("*.*.*")
    if stream_pattern.is_pr_pattern():
        return increment_prerelease_to_stream(source_versions, stream_pattern, increment)
    return increment_release_to_stream(source_versions, stream_pattern, increment)


def increment_release(source_version: Version, increment: Increment | str) -> Version:
    """Bump the release part of ``source_version`` at the given level."""
    release = source_version.release
    if increment == Increment.MAJOR:
        release = Release((release.major + 1) % _UINT64_LIMIT, 0, 0)
    elif increment == Increment.MINOR:
        release = Release(release.major, (release.minor + 1) % _UINT64_LIMIT, 0)
    elif increment == Increment.PATCH:
        release = Release(release.major, release.minor, (release.patch + 1) % _UINT64_LIMIT)
    return dataclasses.replace(source_version, release=release)


def increment_release_to_stream(
    source_versions: Iterable[Version],
    stream_pattern: VersionPattern,
    increment: Increment | str,
) -> Version:
    """Increment the highest version of a release-only stream."""
    if not stream_pattern.is_release_only_pattern():
        raise ValueError("error: stream pattern must be release only")
    try:
        source_version = get_highest_stream_version(source_versions, stream_pattern)
    except EmptyVersionListError:
        return stream_pattern.first_version()
    return increment_release(source_version, increment)


def increment_prerelease_to_stream(
    source_versions: Iterable[Version],
    stream_pattern: VersionPattern,
    increment: Increment | str,
) -> Version:
    """The next version on a prerelease stream."""
    if stream_pattern.is_release_only_pattern():
        raise ValueError("error: stream pattern must be prerelease only")
    try:
        highest_version = get_highest_stream_version_with_releases(
            source_versions, stream_pattern
        )
    except EmptyVersionListError:
        return stream_pattern.first_version()

    stream_version = stream_pattern.first_version()
    if stream_version.is_higher_than(highest_version):
        return stream_version

    if (
        not stream_version.release.is_higher_than(highest_version.release)
        and increment == Increment.NONE
        and highest_version.is_release()
    ):
        increment = Increment.PATCH
    new_version = increment_release(highest_version, increment)

    if not stream_version.prerelease.is_higher_than(highest_version.prerelease):
        prerelease = prerelease_increment(highest_version.prerelease)
    else:
        prerelease = stream_version.prerelease
    return dataclasses.replace(new_version, prerelease=prerelease)


def prerelease_increment(pr_version: PRVersion) -> PRVersion:
    """Bump the last prerelease identifier, or append ``0`` if it cannot be bumped."""
    try:
        incremented = pr_identifier_increment(pr_version.last_id())
    except ValueError:
        return PRVersion(pr_version.identifiers + (PRIdentifier("0"),))
    return PRVersion(pr_version.identifiers[:-1] + (incremented,))


def pr_identifier_increment(source_id: PRIdentifier) -> PRIdentifier:
    """Bump a numeric or single-letter prerelease identifier."""
    if is_numerical(source_id.value):
        return numerical_pr_increment(source_id)
    return alphabetical_increment(source_id)


def numerical_pr_increment(source_identifier: PRIdentifier) -> PRIdentifier:
    """Add one to a numeric identifier."""
    value = source_identifier.value
    if not value or not contains_only(value, NUMBERS):
        raise ValueError(f"invalid numeric identifier: {value!r}")
    number = int(value)
    if number >= _UINT64_LIMIT:
        raise ValueError(f"numeric identifier out of range: {value}")
    return PRIdentifier(str((number + 1) % _UINT64_LIMIT))


def alphabetical_increment(source_identifier: PRIdentifier) -> PRIdentifier:
    """Move a single letter on by one; ``z`` becomes ``za`` and ``Z`` becomes ``ZA``."""
    value = source_identifier.value
    if len(value) != 1:
        raise ValueError("expected a single character identifier")
    if not ("a" <= value <= "z" or "A" <= value <= "Z"):
        raise ValueError("expected an alphabetical identifier")
    if value == "z":
        return PRIdentifier("za")
    if value == "Z":
        return PRIdentifier("ZA")
    return PRIdentifier(chr(ord(value) + 1))


def calculate_increment_type_for_new_prerelease(
    highest_release: Version,
    highest_prerelease: Version,
    requested_increment: Increment,
) -> Increment:
    """The increment still needed for a new prerelease given the existing one."""
    existing = get_increment_type(highest_release, highest_prerelease)
    if existing == Increment.NONE:
        return requested_increment
    if Increment(requested_increment).is_higher_than(existing):
        return requested_increment
    return Increment.NONE


def get_increment_type(highest_release: Version, compared_to: Version) -> Increment:
    """The first release part in which ``compared_to`` is above ``highest_release``."""
    if highest_release.release.major < compared_to.release.major:
        return Increment.MAJOR
    if highest_release.release.minor < compared_to.release.minor:
        return Increment.MINOR
    if highest_release.release.patch < compared_to.release.patch:
        return Increment.PATCH
    return Increment.NONE