from typing import List, Sequence

from railrename.refactor.protocols import ReplaceContext, ReplaceDecision


class ScriptedConfirmation:
    """A handler that replays a pre-defined sequence of decisions."""

    def __init__(
        self,
        decisions: Sequence[ReplaceDecision] = (),
        acknowledge: bool = True,
        default: ReplaceDecision = ReplaceDecision.REPLACE,
    ):
        self._decisions = list(decisions)
        self._acknowledge = acknowledge
        self._default = default
        self.acknowledged: List[str] = []
        self.asked: List[ReplaceContext] = []

    def acknowledge(self, message: str) -> bool:
        self.acknowledged.append(message)
        return self._acknowledge

    def confirm_replacement(self, context: ReplaceContext) -> ReplaceDecision:
        self.asked.append(context)
        if self._decisions:
            return self._decisions.pop(0)
        return self._default
