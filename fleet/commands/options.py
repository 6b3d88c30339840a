"""Shared click options for program commands."""

import click

from fleet.constants import BUILTIN_NETWORKS, DEFAULT_NETWORK
from fleet.core.version_resolver import is_semver


class SemverType(click.ParamType):
    """Semantic version string such as 1.2.0."""

    name = "version"

    def convert(self, value, param, ctx):
        if not is_semver(value):
            self.fail(f"'{value}' is not a semantic version (e.g. 1.2.0)", param, ctx)
        return value


SEMVER = SemverType()


def program_options(func):
    """-p/--program, -v/--version and -n/--network."""
    func = click.option(
        "-n",
        "--network",
        default=DEFAULT_NETWORK,
        show_default=True,
        help=f"Network to deploy to ({', '.join(BUILTIN_NETWORKS)} or a custom network in Fleet.yml)",
    )(func)
    func = click.option(
        "-v",
        "--version",
        "version",
        type=SEMVER,
        default=None,
        help="Version to publish (defaults to the program's Cargo.toml version)",
    )(func)
    func = click.option(
        "-p",
        "--program",
        required=True,
        help="Name of the program in target/deploy/<program>.so",
    )(func)
    return func
