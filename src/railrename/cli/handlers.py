import sys

import click
import typer

from railrename.common import L, railrename_operator as nexus
from railrename.refactor.protocols import ReplaceContext, ReplaceDecision


class TyperConfirmationHandler:
    """Asks the user on the terminal. Declines everything without a TTY."""

    KEYMAP = {
        "y": ReplaceDecision.REPLACE,
        " ": ReplaceDecision.REPLACE,
        "!": ReplaceDecision.REPLACE_ALL,
        "n": ReplaceDecision.DECLINE,
        "q": ReplaceDecision.DECLINE,
    }

    def acknowledge(self, message: str) -> bool:
        if not sys.stdin.isatty():
            return False
        return typer.confirm(message, default=False)

    def confirm_replacement(self, context: ReplaceContext) -> ReplaceDecision:
        if not sys.stdin.isatty():
            return ReplaceDecision.DECLINE

        typer.secho(
            nexus(
                L.rewrite.prompt.header,
                path=context.path.as_posix(),
                lineno=context.lineno,
                line=context.line.strip(),
            ),
            fg=typer.colors.CYAN,
        )
        typer.echo(
            nexus(
                L.rewrite.prompt.question,
                match=context.match,
                replacement=context.replacement,
            )
        )

        while True:
            char = click.getchar().lower()
            decision = self.KEYMAP.get(char)
            if decision is not None:
                return decision
            typer.secho(nexus(L.rewrite.prompt.invalid), fg=typer.colors.RED)
