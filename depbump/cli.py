"""CLI entry point for dep-bump."""

from __future__ import annotations

from pathlib import Path

import click

from .config import DEFAULT_BASE_BRANCH, DEFAULT_REMOTE, load_settings
from .errors import DepBumpError
from .manifest import DEFAULT_MANIFEST
from .models import BumpRequest
from .pipeline import run_bump
from .shell import fatal


class _BumpCommand(click.Command):
    """Exit with status 1 on usage errors, like every other failure."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as exc:
            exc.exit_code = 1
            raise


@click.command(cls=_BumpCommand)
@click.argument("repository", type=click.Path(file_okay=False, path_type=Path))
@click.argument("package")
@click.argument("before_version")
@click.argument("after_version")
@click.option(
    "--base-branch",
    default=DEFAULT_BASE_BRANCH,
    show_default=True,
    help="Default branch to sync from and open the pull request against.",
)
@click.option(
    "--remote",
    default=DEFAULT_REMOTE,
    show_default=True,
    help="Remote to fetch from and push to.",
)
@click.option(
    "--manifest",
    default=DEFAULT_MANIFEST,
    show_default=True,
    help="Manifest file, relative to the repository root.",
)
@click.version_option(package_name="dep-bump")
def cli(
    repository: Path,
    package: str,
    before_version: str,
    after_version: str,
    base_branch: str,
    remote: str,
    manifest: str,
) -> None:
    """Bump PACKAGE from BEFORE_VERSION to AFTER_VERSION and open a pull request.

    Credentials are read from GITHUB_USERNAME and GITHUB_PASSWORD.
    """
    settings = load_settings(
        base_branch=base_branch, remote=remote, manifest_name=manifest
    )
    request = BumpRequest(
        repository_path=repository,
        package_name=package,
        before_version=before_version,
        after_version=after_version,
    )

    try:
        result = run_bump(request, settings)
    except DepBumpError as exc:
        fatal(str(exc))
        return

    click.echo()
    click.echo(f"Pushed {result.branch}")
    click.echo(result.pull_request.url)


def main() -> None:
    cli()
