# smgr

`smgr` manages Semantic Versioning compliant versions. It filters lists of
versions by a stream pattern, picks the highest one, fetches semver tags from
a GitHub repository, and works out the next version to release.

## Installation

```
pip install .
```

## Command line

Show the available commands:

```
smgr --help
```

Every command takes `--dry-run`. On error the message goes to standard error
and the exit status is 1.

### Filtering versions

Versions may be separated by commas or, if there is no comma, by spaces.
An entry that does not parse as a version is read as `0.0.0`.

```
smgr filter --versions "1.0.0 2.0.0" --stream "1.*.*"
# 1.0.0

smgr filter --versions "1.2.3, 1.1.1, bad.version" --highest
# 1.2.3
```

A stream pattern has the shape of a version where any release digit,
prerelease identifier or build identifier may be `*`. `1.*.*` matches every
1.x release, `*.*.*-alpha.*` matches every prerelease of the form `alpha.N`,
and `*.*.*` matches only releases. A prerelease pattern matches only
prereleases with the same number of identifiers. Build metadata is matched
only when the pattern has some.

When nothing matches, an empty line is printed. `--highest` on an empty list
is an error.

### Fetching tags

Fetch the semver tags of a GitHub repository, sorted lowest first, and run
them through the same `--stream` and `--highest` filters:

```
smgr fetch --owner some-owner --repo some-repo --token token --highest
```

Options: `-o/--owner`, `-r/--repo`, `-t/--token`, `-p/--platform` (default
`github`). Tags that are not compliant semver, such as `v1.0.0`, are left out.
With `--dry-run` no platform is contacted and no tags are listed.

### Incrementing a version

```
smgr increment --level major --source-versions "0.0.0,1.0.0,0.1.0"
# 2.0.0

smgr increment --level minor --source-versions "0.0.0,1.0.0,0.1.0" --target-stream "*.*.*-alpha.*"
# 1.1.0-alpha.0
```

Options: `-l/--level` (`major`, `minor` or `patch`; default `patch`),
`-s/--source-versions` and `-t/--target-stream`. Without a target stream the
stream is `*.*.*`. When no source version is on the stream, the lowest version
of the stream is printed. The new version is printed without a trailing
newline.

## Library use

```python
from smgr.version import parse_version
from smgr.pattern import parse_version_pattern
from smgr.filters import get_valid_versions
from smgr.bump import increment_version
from smgr.increment import Increment

versions = get_valid_versions("1.0.0 1.0.1 1.0.2")
stream = parse_version_pattern("1.0.*")
print(increment_version(versions, stream, Increment.PATCH))  # 1.0.3

print(parse_version("1.0.0-beta").is_higher_than(parse_version("1.0.0-alpha")))  # True
```

The modules:

- `smgr.version`: `Version`, `Release`, `PRVersion`, `BuildMetadata` and
  their parsers, such as `parse_version` and `parse_versions`.
- `smgr.pattern`: `VersionPattern` and `parse_version_pattern`.
- `smgr.filters`: `apply_filters`, `highest`, `version_pattern_filter` and
  helpers such as `get_highest_stream_version`.
- `smgr.bump`: `increment_version`, `increment_release`,
  `increment_release_to_stream`, `increment_prerelease_to_stream` and the
  prerelease identifier increments.
- `smgr.increment`: the `Increment` levels and `EmptyVersionListError`.
- `smgr.datasource`: `Datasource`, `GithubTagClient`, `new_semver_svc`,
  `is_semver` and `is_release`.
- `smgr.validate`: `new_semver_validator("strict")` or `("loose")`, the latter
  accepting a leading `v`; `is_semver_valid` returns `True` or raises
  `ValueError`.
- `smgr.fetchers`: `DatasourceConfig` and `new_fetcher`.

Parsing functions raise `ValueError` on input that is not valid semver.

## What smgr does not do

- Only GitHub is supported for fetching tags. Any other `--platform` fails
  with "git platform client is not defined".
- The fetchers of `smgr.fetchers` (`GithubFetcher`, `GitlabFetcher`,
  `OciFetcher`) return no tags; GitLab and OCI registries cannot be read.
- It does not create or push tags, and reads no configuration file or
  environment variables.

## Running the tests

```
pip install ".[test]"
pytest
```