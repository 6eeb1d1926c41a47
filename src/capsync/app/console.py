from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from capsync.core.errors import CaptionError
from capsync.schemas.caption import Caption


def build_caption_table(
    captions: Sequence[Caption], edit_cursor: int | None = None
) -> Table:
    table = Table(title="Captions")
    table.add_column("#", justify="right")
    table.add_column("Start", justify="right")
    table.add_column("End", justify="right")
    table.add_column("Text")
    for index, caption in enumerate(captions):
        marker = "*" if index == edit_cursor else ""
        table.add_row(
            f"{index + 1}{marker}",
            f"{caption.start:g}",
            f"{caption.end:g}",
            escape(caption.text),
        )
    return table


class ConsolePresenter:
    """Presentation surface that writes to a rich console.

    Active caption lines are only printed when the text changes, so a
    playback run at a sub-second interval reads as a list of caption changes.
    """

    def __init__(self, console: Console | None = None, *, show_list: bool = True) -> None:
        self.console = console or Console()
        self.show_list = show_list
        self.error: CaptionError | None = None
        self.active_text: str | None = None
        self._last_time: float | None = None
        self._started = False

    def mark_time(self, time: float) -> None:
        self._last_time = time

    def show_captions(
        self, captions: Sequence[Caption], edit_cursor: int | None
    ) -> None:
        if not self.show_list:
            return
        if captions:
            self.console.print(build_caption_table(captions, edit_cursor))
        else:
            self.console.print("[dim]No captions added yet.[/dim]")

    def show_error(self, error: CaptionError) -> None:
        self.error = error
        label = escape(f"[{error.kind}]")
        self.console.print(f"[red]{label}[/red] {escape(error.message)}")

    def clear_error(self) -> None:
        self.error = None

    def show_active_caption(self, text: str | None) -> None:
        if self._started and text == self.active_text:
            return
        self._started = True
        self.active_text = text
        stamp = f"{self._last_time:8.2f}s " if self._last_time is not None else ""
        if text is None:
            self.console.print(f"{stamp}[dim]-[/dim]")
        else:
            self.console.print(f"{stamp}[bold]{escape(text)}[/bold]", highlight=False)

    def show_playback_error(self, message: str) -> None:
        self.console.print(f"[red]{escape(message)}[/red]")
