"""ConsoleConversationObserver — renders streamed assistant text with Rich."""

from rich.console import Console


class ConsoleConversationObserver:
    """Prints text deltas as they arrive; all bookkeeping events are no-ops.

    Satisfies the ConversationObserver protocol structurally.
    """

    def __init__(self, console: Console) -> None:
        self._console = console
        self._line_open = False

    def stream_started(self, turn_count: int, tool_count: int) -> None:
        self._line_open = False

    def text_delta_applied(self, text: str, content_length: int) -> None:
        if not self._line_open:
            self._console.print("[bold green]assistant>[/] ", end="")
            self._line_open = True
        self._console.print(text, end="", markup=False, highlight=False)

    def tool_call_started(self, tool_name: str, tool_call_id: str) -> None:
        self._close_line()
        self._console.print(f"[dim]… model is calling [bold]{tool_name}[/bold][/dim]")

    def tool_call_unknown_tool(self, tool_name: str, tool_call_id: str) -> None:
        pass

    def tool_call_arguments_malformed(
        self, tool_name: str, tool_call_id: str, raw_arguments: str, reason: str
    ) -> None:
        pass

    def tool_call_reconstructed(
        self, tool_name: str, tool_call_id: str, malformed: bool
    ) -> None:
        pass

    def stream_completed(self, content_length: int, tool_calls: int) -> None:
        self._close_line()

    def stream_failed(self, reason: str) -> None:
        self._close_line()

    def _close_line(self) -> None:
        if self._line_open:
            self._console.print()
            self._line_open = False
