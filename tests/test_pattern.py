import pytest

from smgr.pattern import (
    BuildIdentifierPattern,
    BuildMetadataPattern,
    PRIdentifierPattern,
    PRVersionPattern,
    ReleasePattern,
    VersionPattern,
    parse_version_pattern,
)
from smgr.version import BuildMetadata, PRVersion, Release, parse_release, parse_version


@pytest.mark.parametrize(
    "pattern, expected",
    [
        ("1.0.*-test.*", "1.0.0-test.0"),
        ("1.*.0", "1.0.0"),
        ("1.*.1", "1.0.1"),
        ("*.*.1", "0.0.1"),
    ],
)
def test_first_release(pattern, expected):
    assert parse_version_pattern(pattern).first_release() == parse_release(expected)


def test_first_release_of_empty_pattern_is_zero():
    assert VersionPattern().first_release() == Release(0, 0, 0)


@pytest.mark.parametrize(
    "pattern, expected",
    [
        ("1.0.0-test.*", "1.0.0-test.0"),
        ("1.0.0-*", "1.0.0-0"),
    ],
)
def test_first_prerelease(pattern, expected):
    assert parse_version_pattern(pattern).first_prerelease() == parse_version(expected).prerelease


def test_first_prerelease_without_identifiers_is_empty():
    assert parse_version_pattern("1.0.0").first_prerelease() == PRVersion()


@pytest.mark.parametrize("pattern", ["1.0.0+test.*", "1.0.0+*"])
def test_first_build_metadata(pattern):
    assert parse_version_pattern(pattern).first_build_metadata() == BuildMetadata()


def test_first_version():
    version = parse_version_pattern("1.*.*-alpha.*").first_version()
    assert str(version) == "1.0.0-alpha.0"


@pytest.mark.parametrize(
    "pattern, expected",
    [
        (parse_version_pattern("1.*.*"), True),
        (parse_version_pattern("1.1.1"), True),
        (parse_version_pattern("1.*.*-Alpha"), False),
        (VersionPattern(), False),
    ],
)
def test_is_release_only_pattern(pattern, expected):
    assert pattern.is_release_only_pattern() is expected


def test_is_pr_pattern():
    assert parse_version_pattern("1.*.*-Alpha").is_pr_pattern() is True
    assert parse_version_pattern("1.*.*").is_pr_pattern() is False


def test_is_empty():
    assert VersionPattern().is_empty() is True
    assert parse_version_pattern("*.*.*").is_empty() is False


def test_parse_valid_pattern():
    pattern = parse_version_pattern("1.2.3-alpha.1")
    assert pattern.release == ReleasePattern("1", "2", "3")
    assert pattern.prerelease == PRVersionPattern(
        (PRIdentifierPattern("alpha"), PRIdentifierPattern("1"))
    )


def test_parse_build_wildcard():
    pattern = parse_version_pattern("1.0.0+test.*")
    assert pattern.build == BuildMetadataPattern(
        (BuildIdentifierPattern("test"), BuildIdentifierPattern("*"))
    )


@pytest.mark.parametrize(
    "pattern",
    [
        "1.2.3-alpha.1.bad+",
        "A.2.3",
        "1.A.3",
        "1.2.A",
        "1.2.3-!",
        "1.2.3-",
        "1.2.3-00",
        "1.2.3+!",
        "1",
    ],
)
def test_parse_invalid_pattern(pattern):
    with pytest.raises(ValueError):
        parse_version_pattern(pattern)


def test_release_pattern_strict_and_str():
    strict = parse_version_pattern("1.2.3").release
    loose = parse_version_pattern("1.*.3").release
    assert strict.is_strict() is True
    assert loose.is_strict() is False
    assert str(loose) == "1.*.3"


def test_pattern_str_round_trip():
    assert str(parse_version_pattern("*.*.*-alpha.*+build.*")) == "*.*.*-alpha.*+build.*"