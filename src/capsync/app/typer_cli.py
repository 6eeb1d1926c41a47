from __future__ import annotations

import typer
from rich.console import Console

from capsync.app.console import ConsolePresenter, build_caption_table
from capsync.core.errors import CaptionError
from capsync.core.playback import SimulatedPlayback
from capsync.core.session import CaptionSession
from capsync.core.store import CaptionStore
from capsync.core.sync import active_caption
from capsync.infra.config import AppConfig, build_app_config
from capsync.infra.logging_setup import configure_logging
from capsync.schemas.caption import CaptionDraft

app = typer.Typer(
    name="capsync",
    add_completion=False,
    help="Timed video captions: validate caption ranges and replay them.",
)

CAPTION_HELP = "Caption as START,END,TEXT (seconds). Repeat for more captions."


def parse_caption_option(value: str) -> CaptionDraft:
    parts = value.split(",", 2)
    if len(parts) != 3:
        raise typer.BadParameter(
            f"Expected START,END,TEXT, got '{value}'.", param_hint="--caption"
        )
    start, end, text = parts
    return CaptionDraft(start=start.strip(), end=end.strip(), text=text)


def _load_config(
    *,
    duration: float | None,
    interval: float | None,
    log_level: str | None,
    verbose: bool,
) -> AppConfig:
    try:
        config = build_app_config(
            tick_interval=interval, duration=duration, log_level=log_level
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc
    configure_logging(config, verbose=verbose)
    return config


class _StampedListener:
    """Forwards playback ticks to a session, stamping the presenter first."""

    def __init__(self, session: CaptionSession, presenter: ConsolePresenter) -> None:
        self.session = session
        self.presenter = presenter

    def on_time_update(self, time: float) -> None:
        self.presenter.mark_time(time)
        self.session.on_time_update(time)

    def on_duration_known(self, duration: float) -> None:
        self.session.on_duration_known(duration)


@app.command("check")
def check_command(
    captions: list[str] = typer.Option(
        ..., "--caption", "-c", help=CAPTION_HELP
    ),
    duration: float | None = typer.Option(
        None, "--duration", "-d", help="Video duration in seconds (default: unknown)."
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", help="DEBUG|INFO|WARNING|ERROR (default: CAPSYNC_LOG_LEVEL or WARNING)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Add captions in order and report the ones that are rejected."""
    config = _load_config(
        duration=duration, interval=None, log_level=log_level, verbose=verbose
    )
    drafts = [parse_caption_option(value) for value in captions]
    console = Console()
    store = CaptionStore(duration=config.duration)
    rejected = 0
    for position, draft in enumerate(drafts, start=1):
        try:
            store.add(draft)
        except CaptionError as exc:
            rejected += 1
            typer.echo(f"[{exc.kind}] caption {position}: {exc.message}")
    if len(store):
        console.print(build_caption_table(store.captions))
    typer.echo(
        f"[{'failed' if rejected else 'done'}] accepted={len(store)} rejected={rejected}"
    )
    if rejected:
        raise typer.Exit(code=2)


@app.command("play")
def play_command(
    captions: list[str] = typer.Option(
        ..., "--caption", "-c", help=CAPTION_HELP
    ),
    duration: float = typer.Option(
        ..., "--duration", "-d", help="Video duration in seconds."
    ),
    interval: float | None = typer.Option(
        None, "--interval", "-i", help="Playback polling interval in seconds (default: 0.5)."
    ),
    log_level: str | None = typer.Option(
        None, "--log-level", help="DEBUG|INFO|WARNING|ERROR (default: CAPSYNC_LOG_LEVEL or WARNING)."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Replay the timeline and print each change of the active caption."""
    config = _load_config(
        duration=duration, interval=interval, log_level=log_level, verbose=verbose
    )
    if config.duration <= 0:
        raise typer.BadParameter(
            f"duration must be > 0, got {duration}", param_hint="--duration"
        )
    drafts = [parse_caption_option(value) for value in captions]

    presenter = ConsolePresenter(show_list=False)
    session = CaptionSession(presenter)
    session.on_duration_known(config.duration)
    rejected = sum(1 for draft in drafts if not session.add_caption(draft).ok)

    playback = SimulatedPlayback(config.duration, config.tick_interval)
    ticks = playback.run(_StampedListener(session, presenter))
    typer.echo(
        f"[done] Playback complete.\n"
        f"- captions: {len(session.store)}\n"
        f"- rejected: {rejected}\n"
        f"- ticks: {ticks}"
    )


@app.command("at")
def at_command(
    time: float = typer.Argument(..., help="Playback time in seconds."),
    captions: list[str] = typer.Option(
        ..., "--caption", "-c", help=CAPTION_HELP
    ),
    duration: float | None = typer.Option(
        None, "--duration", "-d", help="Video duration in seconds (default: unknown)."
    ),
) -> None:
    """Print the caption active at TIME."""
    config = _load_config(
        duration=duration, interval=None, log_level=None, verbose=False
    )
    try:
        store = CaptionStore.from_candidates(
            (parse_caption_option(value) for value in captions),
            duration=config.duration,
        )
    except CaptionError as exc:
        typer.echo(f"[{exc.kind}] {exc.message}")
        raise typer.Exit(code=2) from exc
    text = active_caption(time, store.captions)
    typer.echo(text if text else "(no caption)")


def run() -> None:
    """Console-script entrypoint."""
    app()
