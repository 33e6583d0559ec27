"""Leveled console messages for CI logs."""

from __future__ import annotations

import click


def info(message: str) -> None:
    click.echo(f"{click.style('[INFO]', fg='cyan')} {message}")


def warn(message: str) -> None:
    click.echo(f"{click.style('[WARN]', fg='yellow')} {message}", err=True)


def error(message: str) -> None:
    click.echo(f"{click.style('[ERROR]', fg='red')} {message}", err=True)


def passed(message: str) -> None:
    click.echo(f"{click.style('[PASS]', fg='green', bold=True)} {message}")


def failed(message: str) -> None:
    click.echo(f"{click.style('[FAIL]', fg='red', bold=True)} {message}", err=True)


def raw(text: str) -> None:
    """Relay external tool output unchanged."""
    if text:
        click.echo(text)
