import pytest

from smgr.fetchers import (
    DatasourceConfig,
    GithubFetcher,
    GitlabFetcher,
    OciFetcher,
    new_fetcher,
)


@pytest.mark.parametrize(
    "platform, fetcher_class",
    [("github", GithubFetcher), ("gitlab", GitlabFetcher), ("oci", OciFetcher)],
)
def test_new_fetcher_picks_platform(platform, fetcher_class):
    config = DatasourceConfig(owner="owner", repository="repo", token="token", platform=platform)
    fetcher = new_fetcher(config)
    assert type(fetcher) is fetcher_class
    assert fetcher.config is config
    assert fetcher.fetch_tags() == []


@pytest.mark.parametrize("platform", ["", "bitbucket", "GitHub"])
def test_new_fetcher_rejects_unknown_platform(platform):
    with pytest.raises(ValueError, match="unsupported platform"):
        new_fetcher(DatasourceConfig(platform=platform))


def test_config_defaults_are_empty():
    config = DatasourceConfig()
    assert (config.owner, config.repository, config.token, config.platform) == ("", "", "", "")