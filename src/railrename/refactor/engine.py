import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Iterable, List, Optional, Tuple

from railrename.common import L, bus
from railrename.common.transaction import FileOp, Journal
from railrename.convention import KIND_SPECS, classify
from railrename.convention.codec import NAMESPACE_SEPARATOR, path_to_symbol, symbol_to_path
from railrename.convention.kinds import (
    CONTROLLER_COMPANIONS,
    CONTROLLER_FRAGMENT_SCOPE,
    CONTROLLER_SYMBOL_SCOPE,
    LAYOUTS_DIR,
    VIEWS_DIR,
    ArtifactKind,
)
from .context import RefactorContext
from .exceptions import (
    DefinitionNotFoundError,
    FileConflictError,
    FileMissingError,
    InvalidPathError,
    InvalidSymbolError,
    RenameError,
    UndecodableFileError,
    UserAbortedError,
)
from .protocols import AutoConfirmHandler, ConfirmationHandler
from .rewriter import ReferenceRewriter, RewriteResult, word_pattern

_FRAGMENT_RE = re.compile(r"^[a-z][a-z0-9_]*(/[a-z][a-z0-9_]*)*$")
_CONTROLLER_SUFFIX = "_controller"


class RenameState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    MOVING = "moving"
    REWRITING = "rewriting"
    DONE = "done"
    ABORTED = "aborted"


@dataclass
class RenameResult:
    operation: str
    state: RenameState
    ops: List[FileOp] = field(default_factory=list)
    rewrites: List[RewriteResult] = field(default_factory=list)
    warnings: List[RenameError] = field(default_factory=list)

    @property
    def aborted(self) -> bool:
        return self.state == RenameState.ABORTED


@dataclass
class _Session:
    operation: str
    journal: Journal
    rewriter: ReferenceRewriter
    rewrites: List[RewriteResult] = field(default_factory=list)
    warnings: List[RenameError] = field(default_factory=list)
    aborted: bool = False


def _controller_fragment(name: str) -> str:
    """Accepts `Admin::Users`, `Admin::UsersController` or `admin/users`."""
    name = name.strip()
    if NAMESPACE_SEPARATOR in name or name[:1].isupper():
        fragment = symbol_to_path(name)
    else:
        fragment = name.strip("/")
    if fragment.endswith(_CONTROLLER_SUFFIX):
        fragment = fragment[: -len(_CONTROLLER_SUFFIX)]
    if not _FRAGMENT_RE.match(fragment):
        raise InvalidSymbolError(name)
    return fragment


class RenameEngine:
    """
    Orchestrates convention-aware renames.

    Every operation walks Idle -> Validating -> Moving -> Rewriting and ends
    in Done or Aborted. Steps run strictly in order and nothing is rolled
    back: a failure or a declined prompt leaves earlier moves and rewrites
    applied, and the returned result (or the raised error's
    `completed_ops`) lists exactly what changed.
    """

    def __init__(
        self,
        ctx: RefactorContext,
        handler: Optional[ConfirmationHandler] = None,
        interactive: bool = True,
    ):
        self.ctx = ctx
        self.handler: ConfirmationHandler = handler or AutoConfirmHandler()
        self.interactive = interactive
        self.state = RenameState.IDLE

    # --- Session plumbing ---

    def _transition(self, state: RenameState) -> None:
        bus.debug(L.rename.state.changed, old=self.state.value, new=state.value)
        self.state = state

    def _begin(self, operation: str, acknowledge: bool, **kwargs) -> _Session:
        self.state = RenameState.IDLE
        if acknowledge and self.interactive:
            message = bus.render_to_string(L.rename.confirm.irreversible, **kwargs)
            if not self.handler.acknowledge(message):
                self.state = RenameState.ABORTED
                raise UserAbortedError(operation)

        saved = self.ctx.documents.flush()
        for path in saved:
            bus.debug(L.rename.documents.saved, path=path.as_posix())

        journal = Journal(self.ctx.root_path, self.ctx.fs)
        rewriter = ReferenceRewriter(self.ctx.documents, journal, self.handler)
        return _Session(operation, journal, rewriter)

    def _finish(self, session: _Session) -> RenameResult:
        self._transition(RenameState.ABORTED if session.aborted else RenameState.DONE)
        return RenameResult(
            operation=session.operation,
            state=self.state,
            ops=session.journal.ops,
            rewrites=session.rewrites,
            warnings=session.warnings,
        )

    def _run(self, session: _Session, step, *args) -> RenameResult:
        try:
            step(session, *args)
        except (RenameError, OSError) as e:
            self.state = RenameState.ABORTED
            e.completed_ops = session.journal.ops
            raise
        return self._finish(session)

    def _abs(self, rel: Path) -> Path:
        return self.ctx.root_path / rel

    def _rewrite(
        self,
        session: _Session,
        pattern: str,
        replacement: str,
        scope: Optional[Iterable[str]] = None,
        case_sensitive: Optional[bool] = None,
        expand: bool = False,
    ) -> bool:
        """Runs one rewrite pass. Returns False when the user halted it."""
        self._transition(RenameState.REWRITING)
        candidates = self.ctx.scanner.source_files(scope)
        result = session.rewriter.replace_across_files(
            pattern,
            replacement,
            candidates,
            confirm=self.interactive,
            case_sensitive=case_sensitive,
            expand=expand,
        )
        session.rewrites.append(result)
        session.warnings.extend(UndecodableFileError(p) for p in result.skipped)
        if not result.completed:
            session.aborted = True
        return result.completed

    def _move_file(self, session: _Session, src: Path, dest: Path) -> None:
        self._transition(RenameState.MOVING)
        if not self.ctx.fs.exists(self._abs(src)):
            raise FileMissingError(src)
        if self.ctx.fs.exists(self._abs(dest)):
            raise FileConflictError(dest)
        session.journal.move_file(src, dest)
        self.ctx.documents.relocate(src, dest)
        bus.info(L.rename.file.moved, src=src.as_posix(), dest=dest.as_posix())

    # --- Public operations ---

    def query_replace(
        self,
        pattern: str,
        replacement: str,
        scope: Optional[Iterable[str]] = None,
        case_sensitive: Optional[bool] = None,
        expand: bool = True,
    ) -> RenameResult:
        session = self._begin("query_replace", acknowledge=False)
        return self._run(
            session,
            lambda s: self._rewrite(s, pattern, replacement, scope, case_sensitive, expand),
        )

    def rename_class(
        self, from_path: str, to_path: str, rewrite_references: bool = True
    ) -> RenameResult:
        session = self._begin(
            "rename_class", acknowledge=True, src=from_path, dest=to_path
        )
        return self._run(
            session, self._rename_class, Path(from_path), Path(to_path), rewrite_references
        )

    def rename_layout(self, from_name: str, to_name: str) -> RenameResult:
        session = self._begin(
            "rename_layout", acknowledge=True, src=from_name, dest=to_name
        )
        return self._run(session, self._rename_layout, from_name, to_name, True)

    def rename_controller(self, from_name: str, to_name: str) -> RenameResult:
        session = self._begin(
            "rename_controller", acknowledge=True, src=from_name, dest=to_name
        )
        return self._run(session, self._rename_controller, from_name, to_name)

    # --- Steps ---

    def _rename_class(
        self,
        session: _Session,
        from_path: Path,
        to_path: Path,
        rewrite_references: bool,
    ) -> Tuple[str, str]:
        self._transition(RenameState.VALIDATING)
        src = classify(from_path)
        if src is None:
            raise InvalidPathError(from_path)
        dest = classify(to_path)
        if dest is None:
            raise InvalidPathError(to_path)

        self._move_file(session, from_path, to_path)
        self._rewrite_definition(session, to_path, src.symbol, dest.symbol)

        if rewrite_references and src.symbol != dest.symbol:
            self._rewrite(session, word_pattern(src.symbol), dest.symbol)
        return src.symbol, dest.symbol

    def _rewrite_definition(
        self, session: _Session, path: Path, old_symbol: str, new_symbol: str
    ) -> None:
        try:
            doc, opened_here = self.ctx.documents.open(path)
        except UndecodableFileError as e:
            session.warnings.append(e)
            bus.warning(L.rewrite.file.undecodable, path=path.as_posix())
            return
        try:
            candidates = [(old_symbol, new_symbol)]
            old_last = old_symbol.split(NAMESPACE_SEPARATOR)[-1]
            new_last = new_symbol.split(NAMESPACE_SEPARATOR)[-1]
            if old_last != old_symbol:
                # Nested `module Foo; class Bar` style declarations.
                candidates.append((old_last, new_last))

            for old, new in candidates:
                decl = re.compile(
                    rf"^(\s*(?:class|module)\s+){re.escape(old)}(?![\w:])", re.MULTILINE
                )
                match = decl.search(doc.text)
                if match:
                    doc.text = (
                        doc.text[: match.end(1)] + new + doc.text[match.end() :]
                    )
                    session.journal.write(path, doc.text, replacements=1)
                    doc.dirty = False
                    bus.info(L.rename.definition.updated, path=path.as_posix(), symbol=new)
                    return

            warning = DefinitionNotFoundError(path, old_symbol)
            session.warnings.append(warning)
            bus.warning(L.rename.definition.not_found, path=path.as_posix(), symbol=old_symbol)
        finally:
            if opened_here:
                self.ctx.documents.close(path)

    def _rename_layout(
        self, session: _Session, from_name: str, to_name: str, required: bool
    ) -> int:
        self._transition(RenameState.VALIDATING)
        src_name = PurePosixPath(from_name.strip("/"))
        dest_name = PurePosixPath(to_name.strip("/"))
        src_dir = Path(LAYOUTS_DIR) / src_name.parent
        dest_dir = Path(LAYOUTS_DIR) / dest_name.parent

        moves: List[Tuple[Path, Path]] = []
        for path in self.ctx.scanner.list_files([src_dir.as_posix()]):
            if path.parent != src_dir:
                continue
            base, dot, rest = path.name.partition(".")
            if base == src_name.name:
                moves.append((path, dest_dir / f"{dest_name.name}{dot}{rest}"))

        if not moves:
            if required:
                raise FileMissingError(src_dir / src_name.name)
            bus.debug(L.rename.layout.none, name=from_name)
            return 0

        for src, dest in moves:
            self._move_file(session, src, dest)

        if src_name != dest_name:
            self._rewrite(
                session,
                word_pattern(str(src_name)),
                str(dest_name),
                case_sensitive=True,
            )
        return len(moves)

    def _rename_controller(self, session: _Session, from_name: str, to_name: str) -> None:
        self._transition(RenameState.VALIDATING)
        old_fragment = _controller_fragment(from_name)
        new_fragment = _controller_fragment(to_name)
        old_camel = path_to_symbol(old_fragment)
        new_camel = path_to_symbol(new_fragment)

        primary = Path(KIND_SPECS[ArtifactKind.CONTROLLER].companion_path(old_fragment))
        if not self.ctx.fs.exists(self._abs(primary)):
            raise FileMissingError(primary)

        for kind in CONTROLLER_COMPANIONS:
            spec = KIND_SPECS[kind]
            src = Path(spec.companion_path(old_fragment))
            if not self.ctx.fs.exists(self._abs(src)):
                bus.debug(L.rename.companion.skipped, path=src.as_posix())
                continue
            dest = Path(spec.companion_path(new_fragment))
            self._rename_class(session, src, dest, rewrite_references=False)

        views_src = Path(VIEWS_DIR) / old_fragment
        if self.ctx.fs.is_dir(self._abs(views_src)):
            views_dest = Path(VIEWS_DIR) / new_fragment
            self._transition(RenameState.MOVING)
            if self.ctx.fs.exists(self._abs(views_dest)):
                raise FileConflictError(views_dest)
            session.journal.move_directory(views_src, views_dest)
            self.ctx.documents.relocate(views_src, views_dest)
            bus.info(
                L.rename.directory.moved,
                src=views_src.as_posix(),
                dest=views_dest.as_posix(),
            )

        self._rename_layout(session, old_fragment, new_fragment, False)
        if session.aborted:
            return

        if not self._rewrite(
            session,
            rf"\b{re.escape(old_camel)}(?=(?:Controller|Helper)(?:Test|Spec)?\b)",
            new_camel,
            scope=CONTROLLER_SYMBOL_SCOPE,
            case_sensitive=True,
        ):
            return
        self._rewrite(
            session,
            word_pattern(old_fragment),
            new_fragment,
            scope=CONTROLLER_FRAGMENT_SCOPE,
            case_sensitive=True,
        )
