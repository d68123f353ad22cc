"""gitsync command line: mirror a GitHub account into a directory."""

import logging
from pathlib import Path
from typing import Optional

import typer

from gitsync import __version__
from gitsync.client import GitHubClient
from gitsync.config import SyncConfig
from gitsync.exceptions import GitSyncError, SyncAborted, format_error_chain
from gitsync.logging import configure_logging
from gitsync.reconciler import Reconciler
from gitsync.sync import SyncReport, SyncRunner
from gitsync.types.repos import Repository, User
from gitsync.types.sync import SyncResult

app = typer.Typer(add_completion=False)


def _print_failure(exc: BaseException, indent: str = "   ") -> None:
    lines = format_error_chain(exc)
    typer.secho(lines[0], fg=typer.colors.RED, err=True)
    for cause in lines[1:]:
        typer.echo(f"{indent}└─ caused by: {cause}", err=True)


def _print_listing(user: User, repositories: list[Repository]) -> None:
    display = f" ({user.name})" if user.name else ""
    typer.echo(f"User: {user.login}{display}")
    typer.echo(f"Found {len(repositories)} repositories")


def _print_progress(index: int, total: int, result: SyncResult) -> None:
    name = result.target.repository.name
    prefix = f"[{index}/{total}]"
    if result.ok and result.outcome is not None:
        typer.echo(f"{prefix} {name}: {result.outcome.value.replace('_', ' ')}")
    else:
        typer.secho(f"{prefix} {name}: failed", fg=typer.colors.RED)
        if result.error is not None:
            _print_failure(result.error)


def _print_summary(report: SyncReport) -> None:
    typer.echo("")
    typer.secho("Sync finished", bold=True)
    typer.echo(f"  succeeded: {report.succeeded}")
    for outcome, count in sorted(report.outcomes.items(), key=lambda kv: kv[0].value):
        typer.echo(f"    {outcome.value.replace('_', ' ')}: {count}")
    if report.failed:
        typer.secho(f"  failed: {report.failed}", fg=typer.colors.RED)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"gitsync {__version__}")
        raise typer.Exit()


@app.command()
def sync(
    directory: Optional[Path] = typer.Option(
        None, "--directory", "-d", help="Sync directory (default: current directory)"
    ),
    token: Optional[str] = typer.Option(
        None, "--token", "-t", help="GitHub token (default: $GITHUB_TOKEN)"
    ),
    include_private: bool = typer.Option(
        False, "--include-private", "-i", help="Mirror private repositories too"
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Delete existing copies and clone them again"
    ),
    continue_on_error: bool = typer.Option(
        False, "--continue-on-error", "-c", help="Skip failing repositories instead of stopping"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log git and HTTP activity"),
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version"
    ),
) -> None:
    """Mirror every repository a GitHub token can see into a local directory."""
    if verbose:
        configure_logging(level=logging.DEBUG)

    try:
        config = SyncConfig.resolve(
            directory=directory,
            token=token,
            include_private=include_private,
            force=force,
            continue_on_error=continue_on_error,
        )
    except GitSyncError as e:
        _print_failure(e)
        raise typer.Exit(code=1)

    typer.echo(f"Sync directory: {config.sync_dir}")

    reconciler = Reconciler(config.sync_dir, token=config.token, git_host=config.git_host)

    try:
        with GitHubClient(config.token, base_url=config.api_url, timeout=config.timeout) as client:
            runner = SyncRunner(
                client,
                reconciler,
                continue_on_error=config.continue_on_error,
                on_progress=_print_progress,
                on_listed=_print_listing,
            )
            report = runner.run(include_private=config.include_private, force=config.force)
    except SyncAborted as e:
        _print_summary(e.report)
        typer.secho(e.message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
    except GitSyncError as e:
        _print_failure(e)
        raise typer.Exit(code=1)

    if report.repositories:
        _print_summary(report)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
