"""CLI for projj."""

import asyncio
import os

import click
import structlog

from projj.config.logging import configure_logging

logger = structlog.get_logger(__name__)


def run_async(coro):
    """Run an async function synchronously."""
    return asyncio.run(coro)


def _prompt_base(default: str) -> str:
    return click.prompt("Set base directory", default=default)


def _create_service():
    from projj.config.settings import get_settings
    from projj.services.workspace import WorkspaceService

    return WorkspaceService(get_settings())


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool) -> None:
    """projj: manage repositories under a single base directory."""
    from projj.config.settings import get_settings

    log_level = "DEBUG" if verbose else get_settings().log_level
    configure_logging(log_level=log_level)


@cli.command()
@click.argument("repo")
def add(repo: str) -> None:
    """Clone a repository into the base directory.

    REPO can be any git URL or an alias such as github://org/repo.
    """
    async def _add(service):
        await service.add(repo)

    service = _create_service()
    run_async(service.run(_add, prompt=_prompt_base))


@cli.command()
@click.argument("hook")
def run(hook: str) -> None:
    """Run a configured hook in the current directory."""
    async def _run(service):
        await service.run_hook(hook, os.getcwd())

    service = _create_service()
    run_async(service.run(_run, prompt=_prompt_base))


@cli.command()
def status() -> None:
    """Show the configuration and the registered repositories."""
    async def _status(service):
        config = service.config
        entries = await service.index.get()

        click.echo("projj Status")
        click.echo(f"  Base:          {config.base}")
        click.echo(f"  Hooks:         {', '.join(sorted(config.hooks)) or 'none'}")
        click.echo(f"  Repositories:  {len(entries)}")
        for key in service.index.keys():
            click.echo(f"    {key}  ({entries[key].repo})")

    service = _create_service()
    run_async(service.run(_status, prompt=_prompt_base))


if __name__ == "__main__":
    cli()
