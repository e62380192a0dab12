"""Filters that narrow down lists of versions."""

from __future__ import annotations

from typing import Callable, Iterable, Sequence

from smgr.increment import EmptyVersionListError
from smgr.pattern import (
    WILDCARD,
    BuildIdentifierPattern,
    BuildMetadataPattern,
    PRIdentifierPattern,
    PRVersionPattern,
    ReleasePattern,
    VersionPattern,
)
from smgr.version import (
    NUMBERS,
    BuildMetadata,
    PRVersion,
    Version,
    contains_only,
    parse_version,
    split_versions,
)

FilterFunc = Callable[[Sequence[Version]], list]


def _compare_identifiers(a: str, b: str) -> int:
    a_numeric = bool(a) and contains_only(a, NUMBERS)
    b_numeric = bool(b) and contains_only(b, NUMBERS)
    if a_numeric and b_numeric:
        return (int(a) > int(b)) - (int(a) < int(b))
    if a_numeric:
        return -1
    if b_numeric:
        return 1
    return (a > b) - (a < b)


def _compare(a: Version, b: Version) -> int:
    """Compare two versions by semantic version precedence, ignoring build metadata."""
    mine = (a.release.major, a.release.minor, a.release.patch)
    theirs = (b.release.major, b.release.minor, b.release.patch)
    if mine != theirs:
        return 1 if mine > theirs else -1
    if a.is_release() and b.is_release():
        return 0
    if a.is_release():
        return 1
    if b.is_release():
        return -1
    for left, right in zip(a.prerelease.identifiers, b.prerelease.identifiers):
        result = _compare_identifiers(left.value, right.value)
        if result:
            return result
    left_len = len(a.prerelease.identifiers)
    right_len = len(b.prerelease.identifiers)
    return (left_len > right_len) - (left_len < right_len)


def apply_filters(versions: Iterable[Version], *filters: FilterFunc) -> list[Version]:
    """Run ``versions`` through each filter in turn."""
    filtered = list(versions)
    for version_filter in filters:
        filtered = list(version_filter(filtered))
    return filtered


def highest() -> FilterFunc:
    """A filter keeping only the highest version; it raises on an empty list."""

    def _highest(versions: Sequence[Version]) -> list[Version]:
        if not versions:
            raise EmptyVersionListError()
        best = versions[0]
        for version in versions[1:]:
            if _compare(version, best) > 0:
                best = version
        return [best]

    return _highest


def get_highest_stream_version(
    versions: Iterable[Version], stream_pattern: VersionPattern
) -> Version:
    """The highest version matching ``stream_pattern``."""
    return apply_filters(versions, version_pattern_filter(stream_pattern), highest())[0]


def get_highest_stream_version_with_releases(
    versions: Iterable[Version], stream_pattern: VersionPattern
) -> Version:
    """The highest version of the stream, also counting releases when the release part is loose."""
    versions = list(versions)
    candidates = apply_filters(versions, version_pattern_filter(stream_pattern))
    if not stream_pattern.release.is_strict():
        release_only = VersionPattern(
            release=stream_pattern.release,
            prerelease=PRVersionPattern(),
            build=stream_pattern.build,
        )
        candidates.extend(apply_filters(versions, version_pattern_filter(release_only)))
    return apply_filters(candidates, highest())[0]


def version_pattern_filter(pattern: VersionPattern) -> FilterFunc:
    """A filter keeping versions whose every part matches ``pattern``."""

    def _filter(versions: Sequence[Version]) -> list[Version]:
        return apply_filters(
            versions,
            release_pattern_filter(pattern.release),
            prerelease_pattern_filter(pattern.prerelease),
            build_metadata_filter(pattern.build),
        )

    return _filter


def _digit_matches(pattern_value: str, value: int) -> bool:
    return pattern_value == WILDCARD or str(value) == pattern_value


def release_pattern_filter(pattern: ReleasePattern) -> FilterFunc:
    """A filter keeping versions whose release matches ``pattern``."""

    def _filter(versions: Sequence[Version]) -> list[Version]:
        return [
            version
            for version in versions
            if _digit_matches(pattern.major, version.release.major)
            and _digit_matches(pattern.minor, version.release.minor)
            and _digit_matches(pattern.patch, version.release.patch)
        ]

    return _filter


def _match_prerelease(
    identifiers: Sequence[PRIdentifierPattern], prerelease: PRVersion
) -> bool:
    if len(identifiers) != len(prerelease.identifiers):
        return False
    return all(
        expected.value == WILDCARD or expected.value == actual.value
        for expected, actual in zip(identifiers, prerelease.identifiers)
    )


def prerelease_pattern_filter(pattern: PRVersionPattern) -> FilterFunc:
    """A filter keeping versions whose prerelease matches ``pattern`` exactly in length."""

    def _filter(versions: Sequence[Version]) -> list[Version]:
        return [
            version
            for version in versions
            if _match_prerelease(pattern.identifiers, version.prerelease)
        ]

    return _filter


def _match_build_metadata(
    identifiers: Sequence[BuildIdentifierPattern], metadata: BuildMetadata
) -> bool:
    if len(identifiers) != len(metadata.identifiers):
        return False
    return all(
        expected.value == WILDCARD or expected.value == actual.value
        for expected, actual in zip(identifiers, metadata.identifiers)
    )


def build_metadata_filter(pattern: BuildMetadataPattern) -> FilterFunc:
    """A filter on build metadata; an empty pattern keeps everything."""

    def _filter(versions: Sequence[Version]) -> list[Version]:
        if not pattern.identifiers:
            return list(versions)
        return [
            version
            for version in versions
            if _match_build_metadata(pattern.identifiers, version.build_metadata)
        ]

    return _filter


def get_valid_versions(*string_versions_list: str) -> list[Version]:
    """Parse every version of the given lists; unparsable entries become 0.0.0."""
    versions = []
    for string_versions in string_versions_list:
        for raw in split_versions(string_versions):
            try:
                versions.append(parse_version(raw))
            except ValueError:
                versions.append(Version())
    return versions