"""Terminal rendering of the chat transcript and session indicators."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from cea_chat.models import Message, Role, SessionState


class ConsoleView:
    """Prints new messages, the typing indicator, listening state and alerts."""

    def __init__(self, *, assistant_name: str = "Cea", console: Console | None = None) -> None:
        self._assistant_name = assistant_name
        self._console = console or Console()
        self._rendered = 0
        self._loading = False
        self._listening = False

    @property
    def console(self) -> Console:
        return self._console

    def banner(self) -> None:
        self._console.print(
            Panel(Text("Your AI Therapist", justify="center"), title=self._assistant_name, border_style="cyan")
        )

    def render(self, state: SessionState) -> None:
        visible = state.conversation[1:]
        for message in visible[self._rendered :]:
            self._console.print(self.format_message(message))
        self._rendered = len(visible)

        if state.loading and not self._loading:
            self._console.print(Text(f"{self._assistant_name} is typing...", style="italic dim"))
        if state.listening and not self._listening:
            self._console.print(Text("Listening...", style="bold red"))
        self._loading = state.loading
        self._listening = state.listening

    def format_message(self, message: Message) -> Text:
        if message.role == Role.USER:
            return Text.assemble(("You: ", "bold magenta"), message.content, justify="right")
        return Text.assemble((f"{self._assistant_name}: ", "bold cyan"), message.content)

    def alert(self, message: str) -> None:
        self._console.print(Panel(message, title="Alert", border_style="red"))
