"""User-facing terminal output."""

import click


def info(message: str) -> None:
    click.echo(f"{click.style('✔︎  ', fg='green')}{message}")


def child_output(line: str) -> None:
    """Print a line of child process output, indented and dimmed."""
    click.echo(click.style(f"   {line}", dim=True))


def error(message: str) -> None:
    click.echo(click.style(f"✘  {message}", fg="red"), err=True)


def done() -> None:
    click.echo("✨  Done")


def highlight(text: str) -> str:
    return click.style(text, fg="green")
