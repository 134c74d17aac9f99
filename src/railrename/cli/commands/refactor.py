import re
from pathlib import Path
from typing import List, Optional

import typer

from railrename.common import L, bus, railrename_operator as nexus
from railrename.config import find_project_root
from railrename.refactor import (
    AutoConfirmHandler,
    InvalidPathError,
    RefactorContext,
    RenameEngine,
    RenameError,
    RenameResult,
)
from railrename.cli.handlers import TyperConfirmationHandler


def _make_engine(root: Optional[Path], yes: bool) -> RenameEngine:
    root_path = root.resolve() if root else find_project_root()
    ctx = RefactorContext.from_root(root_path)
    if yes:
        return RenameEngine(ctx, AutoConfirmHandler(), interactive=False)
    return RenameEngine(ctx, TyperConfirmationHandler(), interactive=True)


def _relative_to_root(engine: RenameEngine, raw: str) -> str:
    path = Path(raw)
    if not path.is_absolute():
        path = Path.cwd() / path
    try:
        return path.resolve().relative_to(engine.ctx.root_path).as_posix()
    except ValueError:
        raise InvalidPathError(raw)


def _report(result: RenameResult) -> None:
    if result.ops:
        bus.info(L.rename.run.trace_header)
        for op in result.ops:
            typer.echo(f"  {op.describe()}")

    if result.aborted:
        bus.warning(L.rename.run.aborted, operation=result.operation, count=len(result.ops))
        raise typer.Exit(code=1)
    bus.success(L.rename.run.success, operation=result.operation, count=len(result.ops))


def _fail(e: Exception) -> None:
    bus.error(L.error.generic, error=str(e))
    completed = getattr(e, "completed_ops", None)
    if completed:
        bus.warning(L.error.partial, count=len(completed))
        for op in completed:
            typer.echo(f"  {op.describe()}")
    raise typer.Exit(code=1)


def query_replace_command(
    pattern: str = typer.Argument(...),
    replacement: str = typer.Argument(...),
    scope: Optional[List[str]] = typer.Option(
        None, "--scope", "-s", help=nexus(L.cli.option.scope.help)
    ),
    literal: bool = typer.Option(
        False, "--literal", help=nexus(L.cli.option.literal.help)
    ),
    root: Optional[Path] = typer.Option(
        None, "--root", file_okay=False, help=nexus(L.cli.option.root.help)
    ),
    yes: bool = typer.Option(False, "-y", "--yes", help=nexus(L.cli.option.yes.help)),
):
    if literal:
        pattern = re.escape(pattern)
    try:
        re.compile(pattern)
    except re.error as e:
        bus.error(L.error.invalid_pattern, error=str(e))
        raise typer.Exit(code=1)

    engine = _make_engine(root, yes)
    try:
        result = engine.query_replace(
            pattern, replacement, scope=scope or None, expand=not literal
        )
    except (RenameError, OSError) as e:
        _fail(e)
    _report(result)


def rename_class_command(
    from_file: str = typer.Argument(...),
    to_file: str = typer.Argument(...),
    root: Optional[Path] = typer.Option(
        None, "--root", file_okay=False, help=nexus(L.cli.option.root.help)
    ),
    yes: bool = typer.Option(False, "-y", "--yes", help=nexus(L.cli.option.yes.help)),
):
    engine = _make_engine(root, yes)
    try:
        result = engine.rename_class(
            _relative_to_root(engine, from_file), _relative_to_root(engine, to_file)
        )
    except (RenameError, OSError) as e:
        _fail(e)
    _report(result)


def rename_controller_command(
    from_name: str = typer.Argument(...),
    to_name: str = typer.Argument(...),
    root: Optional[Path] = typer.Option(
        None, "--root", file_okay=False, help=nexus(L.cli.option.root.help)
    ),
    yes: bool = typer.Option(False, "-y", "--yes", help=nexus(L.cli.option.yes.help)),
):
    engine = _make_engine(root, yes)
    try:
        result = engine.rename_controller(from_name, to_name)
    except (RenameError, OSError) as e:
        _fail(e)
    _report(result)


def rename_layout_command(
    from_name: str = typer.Argument(...),
    to_name: str = typer.Argument(...),
    root: Optional[Path] = typer.Option(
        None, "--root", file_okay=False, help=nexus(L.cli.option.root.help)
    ),
    yes: bool = typer.Option(False, "-y", "--yes", help=nexus(L.cli.option.yes.help)),
):
    engine = _make_engine(root, yes)
    try:
        result = engine.rename_layout(from_name, to_name)
    except (RenameError, OSError) as e:
        _fail(e)
    _report(result)
