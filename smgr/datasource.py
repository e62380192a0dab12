"""Fetching semantic version tags from hosting platforms and sorting them."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Protocol
from urllib.parse import parse_qs, urlparse

import requests
import semver

_GITHUB_API = "https://api.github.com"
_PER_PAGE = 100
_MAX_UINT64 = 2**64 - 1

_RELEASE_RE = re.compile(r"(0|[1-9]\d*)\.(0|[1-9]\d*)\.(0|[1-9]\d*)", re.ASCII)
_SEMVER_RE = re.compile(
    r"(?P<major>0|[1-9]\d*)\.(?P<minor>0|[1-9]\d*)\.(?P<patch>0|[1-9]\d*)"
    r"(?:-(?P<prerelease>(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*)"
    r"(?:\.(?:0|[1-9]\d*|\d*[a-zA-Z-][0-9a-zA-Z-]*))*))?"
    r"(?:\+(?P<buildmetadata>[0-9a-zA-Z-]+(?:\.[0-9a-zA-Z-]+)*))?",
    re.ASCII,
)


class _TagClient(Protocol):
    def list_tags(self, owner: str, repo: str) -> list[str]: ...


@dataclass
class Filters:
    """Which tags to keep when filtering."""

    highest: bool = False
    release: bool = False


@dataclass
class DryDatasourceClient:
    """A client for dry runs: it lists only the tags it was given, none by default."""

    username: str = ""
    password: str = ""
    repository: str = ""
    tags: list[str] = field(default_factory=list)

    def list_tags(self, owner: str, repo: str) -> list[str]:
        return list(self.tags)


class GithubTagClient:
    """Lists the tags of a GitHub repository through its REST API."""

    def __init__(
        self,
        token: str = "",
        session: requests.Session | None = None,
        base_url: str = _GITHUB_API,
    ) -> None:
        self._token = token
        self._session = session if session is not None else requests.Session()
        self._base_url = base_url.rstrip("/")

    def list_tags(self, owner: str, repo: str) -> list[str]:
        """Every tag name of ``owner/repo``, following pagination."""
        url = f"{self._base_url}/repos/{owner}/{repo}/tags"
        headers = {"Accept": "application/vnd.github+json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        tags: list[str] = []
        page = 1
        while True:
            try:
                response = self._session.get(
                    url,
                    params={"per_page": _PER_PAGE, "page": page},
                    headers=headers,
                    timeout=30,
                )
                response.raise_for_status()
                payload = response.json()
            except (requests.RequestException, ValueError) as err:
                raise RuntimeError(f"ListTags error: {err}") from err

            tags.extend(tag.get("name", "") for tag in payload)

            next_page = _next_page(response.links.get("next"))
            if next_page is None:
                break
            page = next_page
        return tags


def _next_page(link: dict | None) -> int | None:
    if not link:
        return None
    query = parse_qs(urlparse(link.get("url", "")).query)
    try:
        return int(query["page"][0])
    except (KeyError, IndexError, ValueError):
        return None


def _to_version(tag: str) -> semver.Version:
    text = tag[1:] if tag.startswith("v") else tag
    version = semver.Version.parse(text, optional_minor_and_patch=True)
    if max(version.major, version.minor, version.patch) > _MAX_UINT64:
        raise ValueError(f"version segment out of range: {tag}")
    return version


def _precedence(version: semver.Version) -> semver.Version:
    return version.replace(build=None)


def _to_versions(tags: Iterable[str]) -> list[semver.Version]:
    return [_to_version(tag) for tag in tags]


@dataclass
class Datasource:
    """Fetches and filters semantic version tags through a platform client."""

    client: _TagClient | None = None

    def fetch_semver_tags(self, owner: str, repo: str) -> list[str]:
        """The compliant tags of ``owner/repo``, lowest first."""
        if self.client is None:
            raise RuntimeError("git platform client is not defined")
        tags = self.client.list_tags(owner, repo)
        filtered = self.filter_semver_tags(tags, None)
        return self.sort_tags(filtered)

    def filter_highest_semver(self, semver_list: Iterable[str] | None) -> str:
        """The highest compliant tag of ``semver_list``."""
        tags = list(semver_list or [])
        if not tags:
            raise ValueError("error the semantic version list is empty")
        semver_tags = self.filter_semver_tags(tags, None)
        if not semver_tags:
            raise ValueError("error the semantic version list has no compliant version")
        try:
            versions = _to_versions(semver_tags)
        except ValueError as err:
            raise ValueError(f"error while sorting semver tags: {err}") from err
        return str(max(versions, key=_precedence))

    def filter_semver_tags(
        self, tags: Iterable[str], filters: Filters | None = None
    ) -> list[str]:
        """Keep compliant tags, sorted, narrowed by ``filters``."""
        filtered = self.sort_tags(tag for tag in tags if is_semver(tag))
        if filters is not None and filters.release:
            filtered = self.filter_semver_release(filtered)
        if filters is not None and filters.highest and filtered:
            filtered = [self.filter_highest_semver(filtered)]
        return filtered

    def filter_semver_release(self, tags: Iterable[str]) -> list[str]:
        """Keep only tags without a prerelease."""
        return [str(v) for v in _to_versions(tags) if v.prerelease is None]

    def sort_tags(self, tags: Iterable[str]) -> list[str]:
        """Sort tags by semantic version precedence, lowest first."""
        return [str(v) for v in sorted(_to_versions(tags), key=_precedence)]


def new_semver_svc(platform: str, token: str) -> Datasource:
    """A datasource for ``platform``; unknown platforms get no client."""
    if platform == "github":
        return Datasource(client=GithubTagClient(token))
    if platform == "dry-run":
        return Datasource(client=DryDatasourceClient())
    return Datasource()


def is_release(version: str) -> bool:
    """Tell whether ``version`` is a plain major.minor.patch release."""
    return _RELEASE_RE.fullmatch(version) is not None


def is_semver(version: str) -> bool:
    """Tell whether ``version`` is a compliant semantic version."""
    return _SEMVER_RE.fullmatch(version) is not None


def are_semver(versions: Iterable[str]) -> bool:
    """Tell whether every version is compliant."""
    return all(is_semver(version) for version in versions)