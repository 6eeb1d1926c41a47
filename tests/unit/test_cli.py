from __future__ import annotations

import pytest
import typer
from typer.testing import CliRunner

from capsync.app.typer_cli import app, parse_caption_option
from capsync.schemas.caption import CaptionDraft

runner = CliRunner()


def test_parse_caption_option_keeps_commas_in_text() -> None:
    draft = parse_caption_option(" 1 , 2.5,Hello, world")
    assert draft == CaptionDraft(start="1", end="2.5", text="Hello, world")


def test_parse_caption_option_rejects_missing_parts() -> None:
    with pytest.raises(typer.BadParameter, match="START,END,TEXT"):
        parse_caption_option("1,2")


def test_check_reports_rejections_with_kind() -> None:
    result = runner.invoke(
        app,
        [
            "check",
            "--caption", "0,5,Hi",
            "--caption", "3,6,X",
            "--caption", "5,8,Bye",
            "--duration", "10",
        ],
    )
    assert result.exit_code == 2
    assert "[Overlap] caption 2" in result.output
    assert "accepted=2 rejected=1" in result.output


def test_check_succeeds_for_valid_captions() -> None:
    result = runner.invoke(app, ["check", "-c", "0,1,a", "-c", "1,2,b"])
    assert result.exit_code == 0
    assert "[done] accepted=2 rejected=0" in result.output


def test_at_prints_first_match_on_boundary() -> None:
    result = runner.invoke(app, ["at", "5", "-c", "0,5,Hi", "-c", "5,8,Bye"])
    assert result.exit_code == 0
    assert result.output.strip() == "Hi"


def test_at_prints_placeholder_when_nothing_matches() -> None:
    result = runner.invoke(app, ["at", "9", "-c", "0,5,Hi"])
    assert result.exit_code == 0
    assert "(no caption)" in result.output


def test_play_prints_caption_changes() -> None:
    result = runner.invoke(
        app,
        ["play", "-c", "0,1,alpha", "-c", "2,3,beta", "--duration", "3", "--interval", "0.5"],
    )
    assert result.exit_code == 0, result.output
    assert "alpha" in result.output
    assert "beta" in result.output
    assert "- ticks: 7" in result.output


def test_play_requires_positive_duration() -> None:
    result = runner.invoke(app, ["play", "-c", "0,1,a", "--duration", "0"])
    assert result.exit_code != 0
