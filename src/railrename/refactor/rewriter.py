import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, List, Optional, Pattern, Union

from railrename.common import L, bus
from railrename.common.transaction import Journal
from .documents import DocumentCache
from .exceptions import UndecodableFileError
from .protocols import (
    AutoConfirmHandler,
    ConfirmationHandler,
    ReplaceContext,
    ReplaceDecision,
)


class RewriteStatus(str, Enum):
    COMPLETED = "completed"
    ABORTED = "aborted"


@dataclass
class RewriteResult:
    """
    Outcome of one batch rewrite.

    An aborted batch is not rolled back: files listed in `modified` stay
    rewritten, including the file the abort happened in if some of its
    occurrences were accepted before the decline.
    """

    status: RewriteStatus
    pattern: str
    modified: List[Path] = field(default_factory=list)
    replacements: int = 0
    aborted_at: Optional[Path] = None
    # Candidates left untouched because they are not UTF-8 text.
    skipped: List[Path] = field(default_factory=list)

    @property
    def completed(self) -> bool:
        return self.status == RewriteStatus.COMPLETED


def compile_pattern(
    pattern: Union[str, Pattern[str]], case_sensitive: Optional[bool] = None
) -> Pattern[str]:
    if isinstance(pattern, re.Pattern):
        return pattern
    if case_sensitive is None:
        # Smart case: an uppercase letter in the pattern makes it case-sensitive.
        case_sensitive = any(ch.isupper() for ch in pattern)
    return re.compile(pattern, 0 if case_sensitive else re.IGNORECASE)


def word_pattern(literal: str) -> str:
    return rf"\b{re.escape(literal)}\b"


def _line_at(text: str, pos: int):
    start = text.rfind("\n", 0, pos) + 1
    end = text.find("\n", pos)
    if end == -1:
        end = len(text)
    return text.count("\n", 0, pos) + 1, text[start:end]


class ReferenceRewriter:
    """
    Project-wide search and replace, one file at a time, in scan order.

    In confirm mode every occurrence goes through the ConfirmationHandler and
    a single decline halts the batch: later candidates are not opened.
    Without confirmation each file gets a plain replace-all pass.
    """

    def __init__(
        self,
        documents: DocumentCache,
        journal: Journal,
        handler: Optional[ConfirmationHandler] = None,
    ):
        self.documents = documents
        self.journal = journal
        self.handler: ConfirmationHandler = handler or AutoConfirmHandler()

    def replace_across_files(
        self,
        pattern: Union[str, Pattern[str]],
        replacement: str,
        candidates: Iterable[Path],
        confirm: bool = True,
        case_sensitive: Optional[bool] = None,
        expand: bool = False,
    ) -> RewriteResult:
        regex = compile_pattern(pattern, case_sensitive)
        result = RewriteResult(RewriteStatus.COMPLETED, regex.pattern)

        for path in candidates:
            try:
                doc, opened_here = self.documents.open(path)
            except UndecodableFileError as e:
                result.skipped.append(e.path)
                bus.warning(L.rewrite.file.undecodable, path=e.path.as_posix())
                continue
            try:
                if not regex.search(doc.text):
                    continue

                if confirm:
                    new_text, count, declined = self._query_replace(
                        doc.path, doc.text, regex, replacement, expand
                    )
                else:
                    new_text, count = regex.subn(
                        self._substitute(replacement, expand), doc.text
                    )
                    declined = False

                if count:
                    doc.text = new_text
                    self.journal.write(doc.path, doc.text, replacements=count)
                    doc.dirty = False
                    result.modified.append(doc.path)
                    result.replacements += count
                    bus.debug(L.rewrite.file.updated, path=doc.path.as_posix(), count=count)

                if declined:
                    result.status = RewriteStatus.ABORTED
                    result.aborted_at = doc.path
                    bus.warning(L.rewrite.run.aborted, path=doc.path.as_posix())
                    return result
            finally:
                if opened_here:
                    self.documents.close(doc.path)

        return result

    @staticmethod
    def _substitute(replacement: str, expand: bool):
        if expand:
            return lambda m: m.expand(replacement)
        return lambda m: replacement

    def _query_replace(
        self,
        path: Path,
        text: str,
        regex: Pattern[str],
        replacement: str,
        expand: bool,
    ):
        substitute = self._substitute(replacement, expand)
        pieces: List[str] = []
        cursor = 0
        count = 0
        replace_rest = False
        declined = False

        for match in regex.finditer(text):
            new_value = substitute(match)
            if not replace_rest:
                lineno, line = _line_at(text, match.start())
                decision = self.handler.confirm_replacement(
                    ReplaceContext(path, lineno, line, match.group(0), new_value)
                )
                if decision == ReplaceDecision.DECLINE:
                    declined = True
                    break
                if decision == ReplaceDecision.REPLACE_ALL:
                    replace_rest = True

            pieces.append(text[cursor : match.start()])
            pieces.append(new_value)
            cursor = match.end()
            count += 1

        pieces.append(text[cursor:])
        return "".join(pieces), count, declined
