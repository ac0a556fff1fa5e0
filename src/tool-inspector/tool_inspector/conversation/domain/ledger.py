"""ConversationLedger — ordered, append-only transcript of turns."""

from tool_inspector.conversation.domain.errors import LedgerError
from tool_inspector.conversation.domain.turn import Turn


class ConversationLedger:
    """Append-only list of turns; order is the conversation order.

    Every turn except the last one is settled. The last turn may be replaced
    only while it is the in-progress assistant turn of an open stream.
    """

    def __init__(self, turns: list[Turn] | None = None) -> None:
        self._turns: list[Turn] = list(turns) if turns is not None else []

    def __len__(self) -> int:
        return len(self._turns)

    @property
    def last(self) -> Turn | None:
        return self._turns[-1] if self._turns else None

    def append(self, turn: Turn) -> int:
        """Append a turn and return its index."""
        self._turns.append(turn)
        return len(self._turns) - 1

    def replace_last(self, turn: Turn) -> None:
        """Replace the in-progress assistant turn with an updated copy.

        Raises:
            LedgerError: if the ledger is empty, the last turn is not a plain
                assistant turn, or the replacement is not one either.
        """
        last = self.last
        if last is None:
            raise LedgerError("no turn to replace")
        if not last.is_in_progress_candidate:
            kind = "tool result" if last.is_tool_result else last.role
            raise LedgerError(f"last turn is a settled {kind} turn")
        if not turn.is_in_progress_candidate:
            raise LedgerError("replacement must be a plain assistant turn")
        self._turns[-1] = turn

    def snapshot(self) -> tuple[Turn, ...]:
        """Immutable copy of the transcript, in conversation order."""
        return tuple(self._turns)

    def clear(self) -> None:
        """Drop the whole transcript (start a new conversation)."""
        self._turns.clear()
