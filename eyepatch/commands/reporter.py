from typing import Protocol

import typer


class Reporter(Protocol):
    def info(self, message: str) -> None:
        ...

    def success(self, message: str) -> None:
        ...

    def warning(self, message: str) -> None:
        ...

    def error(self, message: str) -> None:
        ...

    def entry(self, message: str, color: str) -> None:
        ...


class ConsoleReporter:
    """Coloured console output for the CLI commands."""

    def info(self, message: str) -> None:
        typer.secho(message, fg=typer.colors.WHITE)

    def success(self, message: str) -> None:
        typer.secho(message, fg=typer.colors.GREEN)

    def warning(self, message: str) -> None:
        typer.secho(message, fg=typer.colors.YELLOW)

    def error(self, message: str) -> None:
        typer.secho(message, fg=typer.colors.RED, err=True)

    def entry(self, message: str, color: str) -> None:
        typer.secho(message, fg=color)
