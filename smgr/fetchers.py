"""Tag fetchers for the supported hosting platforms."""

from __future__ import annotations

from dataclasses import dataclass

from smgr.version import Version


@dataclass
class DatasourceConfig:
    """Where to fetch tags from and how to authenticate."""

    owner: str = ""
    repository: str = ""
    token: str = ""
    platform: str = ""


@dataclass
class GithubFetcher:
    """Fetches version tags from GitHub."""

    config: DatasourceConfig

    def fetch_tags(self) -> list[Version]:
        return []


@dataclass
class GitlabFetcher:
    """Fetches version tags from GitLab."""

    config: DatasourceConfig

    def fetch_tags(self) -> list[Version]:
        return []


@dataclass
class OciFetcher:
    """Fetches version tags from an OCI registry."""

    config: DatasourceConfig

    def fetch_tags(self) -> list[Version]:
        return []


_FETCHERS = {
    "github": GithubFetcher,
    "gitlab": GitlabFetcher,
    "oci": OciFetcher,
}


def new_fetcher(config: DatasourceConfig) -> GithubFetcher | GitlabFetcher | OciFetcher:
    """The fetcher for ``config.platform``."""
    try:
        fetcher_class = _FETCHERS[config.platform]
    except KeyError:
        raise ValueError("unsupported platform") from None
    return fetcher_class(config)