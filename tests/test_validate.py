import pytest

from smgr.validate import (
    LooseValidator,
    StrictValidator,
    is_semver_valid,
    new_semver_validator,
)


@pytest.mark.parametrize(
    "version", ["1.2.3", "1.0.0-alpha.1", "2.0.0-rc.1+build.123", "1.0.0-0A.is.legal"]
)
def test_strict_accepts(version):
    assert StrictValidator().is_valid(version) is True


@pytest.mark.parametrize(
    "version", ["v1.2.3", "1.2", "01.1.1", "1.2.3-0123", "9.8.7+meta+meta", ""]
)
def test_strict_rejects(version):
    with pytest.raises(ValueError, match="invalid semver"):
        StrictValidator().is_valid(version)


def test_strict_rejects_oversized_numbers():
    with pytest.raises(ValueError):
        StrictValidator().is_valid("18446744073709551616.0.0")


def test_loose_accepts_v_prefix():
    assert LooseValidator().is_valid("v1.2.3") is True
    assert LooseValidator().is_valid("1.2.3") is True


def test_loose_strips_only_one_prefix():
    with pytest.raises(ValueError):
        LooseValidator().is_valid("vv1.2.3")


def test_new_semver_validator_kinds():
    assert new_semver_validator("loose").is_valid("v1.0.0") is True
    with pytest.raises(ValueError):
        new_semver_validator("strict").is_valid("v1.0.0")
    with pytest.raises(ValueError):
        new_semver_validator("").is_valid("v1.0.0")


def test_new_semver_validator_unknown():
    with pytest.raises(ValueError):
        new_semver_validator("fuzzy")


def test_is_semver_valid_delegates():
    assert is_semver_valid("v1.2.3", LooseValidator()) is True
    with pytest.raises(ValueError):
        is_semver_valid("v1.2.3", StrictValidator())