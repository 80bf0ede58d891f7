# SPDX-License-Identifier: MIT
"""CLI entry point for the semrange command."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Optional

import click

from .config import ConfigError, SemrangeConfig, load_config
from .errors import ValidationError
from .ranges import Range, parse_range
from .semver import Version, parse_version


class VersionParamType(click.ParamType):
    """Click parameter type that parses a semantic version."""

    name = "version"

    def convert(
        self, value: Any, param: Optional[click.Parameter], ctx: Optional[click.Context]
    ) -> Version:
        if isinstance(value, Version):
            return value
        try:
            return parse_version(value)
        except ValidationError as e:
            self.fail(f"{value!r} is not a valid semantic version: {e}", param, ctx)


class RangeParamType(click.ParamType):
    """Click parameter type that parses a range expression."""

    name = "range"

    def convert(
        self, value: Any, param: Optional[click.Parameter], ctx: Optional[click.Context]
    ) -> Range:
        if isinstance(value, Range):
            return value
        try:
            return parse_range(value)
        except ValidationError as e:
            self.fail(f"{value!r} is not a valid range: {e}", param, ctx)


VERSION = VersionParamType()
RANGE = RangeParamType()


class Context:
    """CLI context object passed to commands."""

    def __init__(self) -> None:
        self.config: Optional[SemrangeConfig] = None
        self.verbose: bool = False
        self.project_dir: Optional[Path] = None

    def load_config(self) -> SemrangeConfig:
        """Load configuration, caching the result."""
        if self.config is None:
            self.config = load_config(self.project_dir)
        return self.config


pass_context = click.make_pass_decorator(Context, ensure=True)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def echo_error(message: str) -> None:
    """Print an error message to stderr."""
    click.secho(f"Error: {message}", fg="red", err=True)


def echo_success(message: str) -> None:
    """Print a success message."""
    click.secho(message, fg="green")


@click.group()
@click.version_option(package_name="semrange")
@click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose output.",
)
@click.option(
    "-C",
    "--directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Read pyproject.toml configuration from this directory.",
)
@pass_context
def cli(ctx: Context, verbose: bool, directory: Optional[Path]) -> None:
    """Parse, compare and range-match semantic versions.

    \b
    Examples:
        semrange validate 1.2.3 1.2.3-rc.1
        semrange compare 1.0.0 1.0.0-alpha
        semrange sort 1.10.0 1.2.0 1.2.0-rc.1
        semrange bump minor 1.4.2
        semrange match -r ">=1.2.0 <2.0.0 || 3.x" 1.5.0 2.1.0 3.0.1
    """
    ctx.verbose = verbose
    ctx.project_dir = directory
    setup_logging(verbose)


@cli.command()
@click.argument("versions", nargs=-1, required=True)
def validate(versions: tuple[str, ...]) -> None:
    """Check that each VERSION is a valid semantic version."""
    failed = False
    for text in versions:
        try:
            parse_version(text)
        except ValidationError as e:
            echo_error(f"{text}: {e}")
            failed = True
        else:
            echo_success(f"{text}: valid")
    if failed:
        raise SystemExit(1)


@cli.command()
@click.argument("version1", type=VERSION)
@click.argument("version2", type=VERSION)
def compare(version1: Version, version2: Version) -> None:
    """Print -1, 0 or 1 as VERSION1 is lower, equal or higher than VERSION2."""
    click.echo(version1.compare(version2))


@cli.command(name="sort")
@click.option("--reverse", "-r", is_flag=True, help="Print the highest version first.")
@click.argument("versions", nargs=-1, required=True, type=VERSION)
def sort_versions(versions: tuple[Version, ...], reverse: bool) -> None:
    """Print VERSIONS in precedence order."""
    for version in sorted(versions, reverse=reverse):
        click.echo(str(version))


@cli.command()
@click.argument("part", type=click.Choice(["major", "minor", "patch"]))
@click.argument("version", type=VERSION, required=False)
@pass_context
def bump(ctx: Context, part: str, version: Optional[Version]) -> None:
    """Print VERSION with PART incremented.

    Without VERSION the [project].version from pyproject.toml is used.
    """
    if version is None:
        version = ctx.load_config().project_version
        if version is None:
            echo_error("No VERSION given and no [project].version configured")
            raise SystemExit(1)

    try:
        bumped = getattr(version, f"increment_{part}")()
    except ValidationError as e:
        echo_error(str(e))
        raise SystemExit(1)
    click.echo(str(bumped))


@cli.command()
@click.option("--range", "-r", "range_", type=RANGE, help="Range expression to match against.")
@click.option(
    "--prerelease/--no-prerelease",
    default=None,
    help="Accept or skip pre-release versions (default from configuration).",
)
@click.argument("versions", nargs=-1, required=True, type=VERSION)
@pass_context
def match(
    ctx: Context,
    range_: Optional[Range],
    prerelease: Optional[bool],
    versions: tuple[Version, ...],
) -> None:
    """Print each VERSION that satisfies the range.

    Without --range the [tool.semrange].range from pyproject.toml is used.
    Exits with status 1 if no version matches.
    """
    if range_ is None or prerelease is None:
        config = ctx.load_config()
        if range_ is None:
            range_ = config.default_range
            if range_ is None:
                echo_error("No --range given and no [tool.semrange].range configured")
                raise SystemExit(1)
        if prerelease is None:
            prerelease = config.prerelease

    matched = [
        version
        for version in versions
        if (prerelease or not version.is_prerelease) and range_(version)
    ]
    for version in matched:
        click.echo(str(version))
    if not matched:
        raise SystemExit(1)


@cli.command()
@click.argument("version", type=VERSION)
@click.argument("floor", type=VERSION)
def compatible(version: Version, floor: Version) -> None:
    """Exit 0 if VERSION is compatible under FLOOR (same major, minor not newer)."""
    if version.compatible_under(floor):
        echo_success(f"{version} is compatible under {floor}")
    else:
        echo_error(f"{version} is not compatible under {floor}")
        raise SystemExit(1)


def main() -> None:
    """Main entry point for the CLI."""
    try:
        cli()
    except ConfigError as e:
        echo_error(str(e))
        sys.exit(1)
    except FileNotFoundError as e:
        echo_error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
