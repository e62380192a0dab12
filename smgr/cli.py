"""Command line interface: filter, fetch and increment semantic versions."""

from __future__ import annotations

import argparse
import dataclasses
import sys
from dataclasses import dataclass
from typing import Sequence

from smgr.bump import increment_version
from smgr.datasource import new_semver_svc
from smgr.filters import apply_filters, get_valid_versions, highest, version_pattern_filter
from smgr.increment import EmptyVersionListError, Increment
from smgr.pattern import VersionPattern, parse_version_pattern
from smgr.version import Version, format_versions


@dataclass
class FilterArgs:
    """The criteria of the filter command."""

    stream_filter: str = ""
    highest: bool = False
    release: bool = False
    versions: str = ""


def filter_versions(filter_args: FilterArgs) -> list[Version]:
    """Parse the versions of ``filter_args`` and keep those matching its criteria."""
    versions = get_valid_versions(filter_args.versions)
    filters = []
    if filter_args.stream_filter:
        filters.append(version_pattern_filter(parse_version_pattern(filter_args.stream_filter)))
    if filter_args.highest:
        filters.append(highest())
    return apply_filters(versions, *filters)


def run_fetch(
    owner: str,
    repo: str,
    token: str,
    platform: str,
    dry_run: bool,
    filter_args: FilterArgs,
) -> list[Version]:
    """Fetch the semantic version tags of a repository and filter them."""
    if not platform:
        platform = "github"
    if dry_run:
        platform = "dry-run"
    datasource = new_semver_svc(platform, token)
    tags = datasource.fetch_semver_tags(owner, repo)
    return filter_versions(dataclasses.replace(filter_args, versions=" ".join(tags)))


def _as_increment(level: str) -> Increment | str:
    try:
        return Increment(level)
    except ValueError:
        return level


def run_increment(level: str, source_versions: str, target_stream: str) -> Version:
    """The next version after ``source_versions`` at ``level`` on ``target_stream``."""
    if not level and not target_stream:
        level = Increment.PATCH.value
    versions = get_valid_versions(source_versions)
    pattern = parse_version_pattern(target_stream) if target_stream else VersionPattern()
    return increment_version(versions, pattern, _as_increment(level))


def _filter_command(args: argparse.Namespace, dry_run: bool) -> str:
    filter_args = FilterArgs(
        stream_filter=args.stream, highest=args.highest, versions=args.versions
    )
    return format_versions(filter_versions(filter_args)) + "\n"


def _fetch_command(args: argparse.Namespace, dry_run: bool) -> str:
    filter_args = FilterArgs(
        stream_filter=args.stream, highest=args.highest, versions=args.versions
    )
    versions = run_fetch(args.owner, args.repo, args.token, args.platform, dry_run, filter_args)
    return format_versions(versions) + "\n"


def _increment_command(args: argparse.Namespace, dry_run: bool) -> str:
    return str(run_increment(args.level, args.source_versions, args.target_stream))


def build_parser() -> argparse.ArgumentParser:
    """The argument parser of the ``smgr`` command and its subcommands."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--dry-run",
        action="store_true",
        default=argparse.SUPPRESS,
        help="Execute the command in dry-run mode",
    )

    filter_options = argparse.ArgumentParser(add_help=False)
    filter_options.add_argument("-V", "--versions", default="", help="Version list to filter")
    filter_options.add_argument(
        "-s",
        "--stream",
        default="",
        help="Filter by major, minor, patch, prerelease version and build metadata streams",
    )
    filter_options.add_argument(
        "-H", "--highest", action="store_true", help="Filter by highest version"
    )

    parser = argparse.ArgumentParser(
        prog="smgr",
        description=(
            "Manage Semantic Versioning compliant versions and integrate with popular "
            "repository and registry platforms to facilitate the task."
        ),
        parents=[common],
    )
    subparsers = parser.add_subparsers(dest="command")

    filter_parser = subparsers.add_parser(
        "filter",
        parents=[common, filter_options],
        help="Filter versions",
        description="Filter versions using various criteria.",
    )
    filter_parser.set_defaults(handler=_filter_command)

    fetch_parser = subparsers.add_parser(
        "fetch",
        parents=[common, filter_options],
        help="Fetch semver tags from a repository.",
        description=(
            "Fetch semver tags from a repository, sorted from lowest to highest. "
            "All the filters of the filter command are supported."
        ),
    )
    fetch_parser.add_argument(
        "-o", "--owner", default="", help="The owner of the registry or repository"
    )
    fetch_parser.add_argument(
        "-r", "--repo", default="", help="The repository or registry to fetch the tags from"
    )
    fetch_parser.add_argument("-t", "--token", default="", help="The token to access the repository")
    fetch_parser.add_argument(
        "-p",
        "--platform",
        default="github",
        help="The platform to fetch the tags from, options: github",
    )
    fetch_parser.set_defaults(handler=_fetch_command)

    increment_parser = subparsers.add_parser(
        "increment",
        parents=[common],
        help="Increment a version",
        description=(
            "Increment a version at a level (major, minor, patch) from source versions, "
            "optionally onto a target stream such as 1.2.*."
        ),
    )
    increment_parser.add_argument(
        "-l",
        "--level",
        default=Increment.PATCH.value,
        help="The level of increment to perform, options: major, minor, patch",
    )
    increment_parser.add_argument(
        "-t", "--target-stream", default="", help="The target stream to increment to e.g. 1.2.*"
    )
    increment_parser.add_argument(
        "-s",
        "--source-versions",
        default="",
        help='The source versions to increment from e.g. "0.0.0,1.0.0,1.1.0"',
    )
    increment_parser.set_defaults(handler=_increment_command)

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the ``smgr`` command and return its exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 0
    dry_run = getattr(args, "dry_run", False)
    try:
        output = args.handler(args, dry_run)
    except (ValueError, RuntimeError, EmptyVersionListError) as err:
        print(err, file=sys.stderr)
        return 1
    sys.stdout.write(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())