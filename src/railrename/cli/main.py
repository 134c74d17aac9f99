import typer

from railrename.common import L, bus, railrename_operator as nexus
from .commands.refactor import (
    query_replace_command,
    rename_class_command,
    rename_controller_command,
    rename_layout_command,
)
from .rendering import LEVELS, CliRenderer

app = typer.Typer(
    name="railrename",
    help=nexus(L.cli.app.help),
    no_args_is_help=True,
)


@app.callback()
def main(
    loglevel: str = typer.Option(
        "info",
        "--loglevel",
        case_sensitive=False,
        help=nexus(L.cli.option.loglevel.help),
    ),
):
    level = loglevel.lower()
    if level not in LEVELS:
        raise typer.BadParameter(f"must be one of {', '.join(LEVELS)}", param_hint="--loglevel")
    bus.set_renderer(CliRenderer(loglevel=level))


app.command(name="query-replace", help=nexus(L.cli.command.query_replace.help))(
    query_replace_command
)
app.command(name="rename-class", help=nexus(L.cli.command.rename_class.help))(
    rename_class_command
)
app.command(name="rename-controller", help=nexus(L.cli.command.rename_controller.help))(
    rename_controller_command
)
app.command(name="rename-layout", help=nexus(L.cli.command.rename_layout.help))(
    rename_layout_command
)

if __name__ == "__main__":
    app()
