"""Command-line tools for maintaining the E2E environment.

Provides commands for removing applications left behind by aborted
runs and for checking the environment configuration.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Annotated

import typer

from pwappy_e2e.config import E2ESettings, load_settings
from pwappy_e2e.models import ConfigurationError, SweepResult
from pwappy_e2e.utils.logging import setup_logging

app = typer.Typer(
    name="pwappy-e2e",
    help="Pwappy E2E maintenance tools - clean up test apps and check configuration",
)

DEFAULT_CLEANUP_PREFIX = "test-app-"
MASKED = "[MASKED]"


def _load_or_exit() -> E2ESettings:
    try:
        return load_settings()
    except ConfigurationError as e:
        typer.echo(f"❌ {e.message}", err=True)
        raise typer.Exit(2) from e


async def _run_cleanup(settings: E2ESettings, prefix: str, headless: bool) -> SweepResult:
    from pwappy_e2e.browser.session import launch_browser_context
    from pwappy_e2e.dashboard import open_dashboard, sweep_apps

    async with launch_browser_context(settings, headless=headless) as context:
        page = await context.new_page()
        await open_dashboard(page, settings.base_url)
        return await sweep_apps(page, prefix)


@app.command()
def cleanup(
    prefix: Annotated[
        str,
        typer.Option(
            "--prefix",
            "-p",
            help="Delete applications whose name starts with this prefix",
        ),
    ] = DEFAULT_CLEANUP_PREFIX,
    headed: Annotated[
        bool,
        typer.Option(
            "--headed",
            help="Show the browser window",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log every step",
        ),
    ] = False,
) -> None:
    """Delete leftover test applications from the workbench and archive.

    Published versions are unpublished first so the application can be
    deleted.

    Example:
        pwappy-e2e cleanup --prefix test-app-ci-
    """
    setup_logging(logging.DEBUG if verbose else logging.INFO)
    settings = _load_or_exit()

    typer.echo("🧹 Sweeping leftover applications...")
    typer.echo(f"   Dashboard: {settings.base_url}")
    typer.echo(f"   Prefix: {prefix}")

    try:
        result = asyncio.run(_run_cleanup(settings, prefix, headless=not headed))
    except KeyboardInterrupt:
        typer.echo("\n⚠️  Cleanup interrupted")
        raise typer.Exit(130) from None

    for name in result.deleted:
        typer.echo(f"   ✅ {name}")
    for name, error in result.failed.items():
        typer.echo(f"   ❌ {name}: {error}", err=True)

    typer.echo(f"Deleted {len(result.deleted)}, failed {len(result.failed)}")
    if result.failed:
        raise typer.Exit(1)


@app.command("check-config")
def check_config() -> None:
    """Print the resolved E2E settings with credentials masked."""
    settings = _load_or_exit()

    typer.echo("🔧 E2E configuration")
    typer.echo(f"   Base URL: {settings.base_url}")
    typer.echo(f"   Cookie domain: {settings.cookie_domain}")
    typer.echo(f"   pwappy_auth: {MASKED}")
    typer.echo(f"   pwappy_ident_key: {MASKED}")
    typer.echo(f"   Run suffix: {settings.run_suffix}")
    typer.echo(f"   Browser: {settings.browser.value}")
    typer.echo(f"   Headless: {settings.headless}")
    typer.echo(f"   Mobile: {settings.mobile}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
