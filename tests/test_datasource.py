import pytest

from smgr.datasource import (
    Datasource,
    DryDatasourceClient,
    Filters,
    GithubTagClient,
    are_semver,
    is_release,
    is_semver,
    new_semver_svc,
)

VALID = [
    "0.0.4",
    "1.2.3",
    "10.20.30",
    "1.1.2-prerelease+meta",
    "1.1.2+meta",
    "1.1.2+meta-valid",
    "1.0.0-alpha",
    "1.0.0-beta",
    "1.0.0-alpha.beta",
    "1.0.0-alpha.beta.1",
    "1.0.0-alpha.1",
    "1.0.0-alpha0.valid",
    "1.0.0-alpha.0valid",
    "1.0.0-alpha-a.b-c-somethinglong+build.1-aef.1-its-okay",
    "1.0.0-rc.1+build.1",
    "2.0.0-rc.1+build.123",
    "1.2.3-beta",
    "10.2.3-DEV-SNAPSHOT",
    "1.2.3-SNAPSHOT-123",
    "1.0.0",
    "2.0.0",
    "1.1.7",
    "2.0.0+build.1848",
    "2.0.1-alpha.1227",
    "1.0.0-alpha+beta",
    "1.2.3----RC-SNAPSHOT.12.9.1--.12+788",
    "1.2.3----R-S.12.9.1--.12+meta",
    "1.2.3----RC-SNAPSHOT.12.9.1--.12",
    "1.0.0+0.build.1-rc.10000aaa-kk-0.1",
    "99999999999999999999999.999999999999999999.99999999999999999",
    "1.0.0-0A.is.legal",
]

INVALID = [
    "1",
    "1.2",
    "1.2.3-0123",
    "1.2.3-0123.0123",
    "1.1.2+.123",
    "+invalid",
    "-invalid",
    "-invalid+invalid",
    "-invalid.01",
    "alpha",
    "alpha.beta",
    "alpha.beta.1",
    "alpha.1",
    "alpha+beta",
    "alpha_beta",
    "alpha.",
    "alpha..",
    "beta",
    "1.0.0-alpha_beta",
    "-alpha.",
    "1.0.0-alpha..",
    "1.0.0-alpha..1",
    "1.0.0-alpha...1",
    "1.0.0-alpha....1",
    "1.0.0-alpha.....1",
    "1.0.0-alpha......1",
    "1.0.0-alpha.......1",
    "01.1.1",
    "1.01.1",
    "1.1.01",
    "1.2.3.DEV",
    "1.2-SNAPSHOT",
    "1.2.31.2.3----RC-SNAPSHOT.12.09.1--..12+788",
    "1.2-RC-SNAPSHOT",
    "-1.0.3-gamma+b7718",
    "+justmeta",
    "9.8.7+meta+meta",
    "9.8.7-whatever+meta+meta",
    "99999999999999999999999.999999999999999999.99999999999999999"
    "----RC-SNAPSHOT.12.09.1--------------------------------..12",
]


@pytest.mark.parametrize("version", VALID)
def test_is_semver_valid(version):
    assert is_semver(version) is True


@pytest.mark.parametrize("version", INVALID)
def test_is_semver_invalid(version):
    assert is_semver(version) is False


def test_are_semver():
    assert are_semver(["1.0.0", "1.2.3-beta"]) is True
    assert are_semver(["1.0.0", "1.2"]) is False


@pytest.mark.parametrize(
    "version, expected",
    [
        ("1.2.3", True),
        ("1.2", False),
        ("1.2.3.4", False),
        ("a.2.3", False),
        ("1.b.3", False),
        ("1.2.c", False),
        ("1.2.3.0", False),
        ("1.2.-3", False),
        ("01.02.003", False),
    ],
)
def test_is_release(version, expected):
    assert is_release(version) is expected


@pytest.mark.parametrize(
    "tags, expected",
    [
        ([], []),
        (["1.0.0", "1.1.0", "1.2.0", "not-a-tag", "1.2.1"], ["1.2.1"]),
        (["1.0.0", "1.1.0", "1.2.0", "1.2.1"], ["1.2.1"]),
    ],
)
def test_filter_semver_tags_highest(tags, expected):
    assert Datasource().filter_semver_tags(tags, Filters(highest=True)) == expected


@pytest.mark.parametrize(
    "tags, expected",
    [
        (["v1.0", "v2.0.0", "release-1.1"], []),
        (["v1.0.0", "v2.0.0", "release-1.1", "1.2.3-alpha"], ["1.2.3-alpha"]),
        (
            [
                "v1.0.0",
                "v2.0.0",
                "release-1.1",
                "1.2.3-alpha",
                "2.0.0",
                "v3.0.0-beta.1",
                "4.5.6-rc.1+build.123",
            ],
            ["1.2.3-alpha", "2.0.0", "4.5.6-rc.1+build.123"],
        ),
        (
            [
                "v1.0.0",
                "1.2",
                "v2.0.0",
                "release-1.1",
                "1.2.3-0123",
                "1.2.3-0123.0123",
                "+invalid",
                "-invalid",
                "-invalid+invalid",
                "-invalid.01",
                "alpha",
                "alpha_beta",
                "01.1.1",
                "1.01.1",
                "1.1.01",
                "1.2.3.DEV",
                "1.2-SNAPSHOT",
                "1.2-RC-SNAPSHOT",
                "-1.0.3-gamma+b7718",
                "+justmeta",
                "9.8.7+meta+meta",
                "9.8.7-whatever+meta+meta",
            ],
            [],
        ),
    ],
)
def test_filter_semver_tags(tags, expected):
    assert Datasource().filter_semver_tags(tags, None) == expected


@pytest.mark.parametrize(
    "tags, expected",
    [
        (
            ["1.0.0-alpha", "1.0.0", "1.1.0", "2.0.0-beta", "2.0.0"],
            ["1.0.0", "1.1.0", "2.0.0"],
        ),
        (
            ["1.0.0-alpha", "1.0.0", "1.1.0", "2.0.0-beta", "2.0.0", "invalid"],
            ["1.0.0", "1.1.0", "2.0.0"],
        ),
        (["1.0.0-alpha", "1.0.0-beta", "2.0.0-beta", "2.0.0-alpha"], []),
        ([], []),
        (
            ["1.0.0", "1.1.0", "2.0.0", "v3.0.0", "3.0.1", "3.0.2", "non-semver"],
            ["1.0.0", "1.1.0", "2.0.0", "3.0.1", "3.0.2"],
        ),
    ],
)
def test_filter_semver_tags_release(tags, expected):
    assert Datasource().filter_semver_tags(tags, Filters(release=True)) == expected


def test_sort_tags_follows_precedence():
    ordered = [
        "1.0.0-alpha",
        "1.0.0-alpha.1",
        "1.0.0-alpha.beta",
        "1.0.0-beta",
        "1.0.0-beta.2",
        "1.0.0-beta.11",
        "1.0.0-rc.1",
        "1.0.0",
    ]
    assert Datasource().sort_tags(list(reversed(ordered))) == ordered


def test_sort_tags_is_idempotent():
    tags = ["2.0.0", "0.0.4", "1.2.3-beta", "10.20.30", "1.1.7"]
    once = Datasource().sort_tags(tags)
    assert Datasource().sort_tags(once) == once
    assert sorted(once) == sorted(tags)


def test_oversized_release_number_is_rejected():
    with pytest.raises(ValueError):
        Datasource().filter_semver_tags(
            ["99999999999999999999999.999999999999999999.99999999999999999"]
        )


def test_filter_highest_semver():
    tags = ["1.0.0", "1.1.0", "1.2.0", "not-a-tag", "1.2.1"]
    assert Datasource().filter_highest_semver(tags) == "1.2.1"


def test_filter_highest_semver_empty():
    with pytest.raises(ValueError):
        Datasource().filter_highest_semver([])


class _FakeClient:
    def __init__(self, tags):
        self.tags = tags
        self.calls = []

    def list_tags(self, owner, repo):
        self.calls.append((owner, repo))
        return self.tags


def test_fetch_semver_tags_filters_and_sorts():
    client = _FakeClient(["v1.0.0", "2.0.0", "1.0.0", "not-a-tag", "1.0.0-rc.1"])
    datasource = Datasource(client=client)
    assert datasource.fetch_semver_tags("owner", "repo") == ["1.0.0-rc.1", "1.0.0", "2.0.0"]
    assert client.calls == [("owner", "repo")]


def test_fetch_without_client_raises():
    with pytest.raises(RuntimeError, match="client is not defined"):
        Datasource().fetch_semver_tags("owner", "repo")


def test_dry_run_service_fetches_nothing():
    assert new_semver_svc("dry-run", "token").fetch_semver_tags("owner", "repo") == []


def test_unknown_platform_has_no_client():
    with pytest.raises(RuntimeError):
        new_semver_svc("unknown", "token").fetch_semver_tags("owner", "repo")


def test_dry_client_lists_nothing():
    assert DryDatasourceClient().list_tags("owner", "repo") == []


class _FakeResponse:
    def __init__(self, payload, links):
        self._payload = payload
        self.links = links

    def raise_for_status(self):
        return None

    def json(self):
        return self._payload


class _FakeSession:
    def __init__(self, pages):
        self.pages = pages
        self.requests = []

    def get(self, url, params=None, headers=None, timeout=None):
        self.requests.append((url, dict(params), dict(headers)))
        page = params["page"]
        payload = [{"name": name} for name in self.pages[page - 1]]
        links = {}
        if page < len(self.pages):
            links["next"] = {"url": f"{url}?per_page=100&page={page + 1}"}
        return _FakeResponse(payload, links)


def test_github_client_follows_pages():
    session = _FakeSession([["1.0.0", "1.1.0"], ["2.0.0"]])
    client = GithubTagClient("token", session=session, base_url="https://api.example.com")
    assert client.list_tags("owner", "repo") == ["1.0.0", "1.1.0", "2.0.0"]
    assert [params["page"] for _, params, _ in session.requests] == [1, 2]
    url, params, headers = session.requests[0]
    assert url == "https://api.example.com/repos/owner/repo/tags"
    assert params["per_page"] == 100
    assert headers["Authorization"] == "Bearer token"


class _FailingSession:
    def get(self, url, params=None, headers=None, timeout=None):
        import requests

        raise requests.ConnectionError("boom")


def test_github_client_wraps_errors():
    client = GithubTagClient("token", session=_FailingSession())
    with pytest.raises(RuntimeError, match="ListTags error"):
        client.list_tags("owner", "repo")