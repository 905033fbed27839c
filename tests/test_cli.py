"""Tests for the jdk command line in local-only mode."""

import sys
from unittest.mock import patch

import pytest

from job_deck.cli import _parse_flags, main
from job_deck.config import Settings


@pytest.fixture
def jdk(tmp_path, capsys):
    settings = Settings(local_only=True, persist=True, snapshot_path=tmp_path / "state.json")

    def invoke(*args) -> tuple[int, str]:
        with patch("job_deck.tracker.get_settings", return_value=settings), \
                patch.object(sys, "argv", ["jdk", *args]):
            with pytest.raises(SystemExit) as exc:
                main()
        return exc.value.code, capsys.readouterr().out

    return invoke


def test_parse_flags():
    parsed, rest = _parse_flags(["a", "--status=applied", "--other=x", "b"], {"status": str})
    assert parsed == {"status": "applied"}
    assert rest == ["a", "--other=x", "b"]


def test_add_list_and_filter(jdk):
    code, out = jdk("add", "Backend Engineer", "Acme", "--source=LinkedIn", "--status=applied")
    assert code == 0
    assert "|Backend Engineer|Acme|applied|LinkedIn|-" in out

    jdk("add", "Designer", "Zigza")

    code, out = jdk("list", "--search=acme")
    assert code == 0
    assert "Backend Engineer" in out
    assert "Designer" not in out
    assert "1 jobs" in out


def test_move_note_and_dashboard(jdk):
    _, out = jdk("add", "PM", "Acme")
    job_id = out.split("|")[0]

    code, _ = jdk("move", job_id, "interview")
    assert code == 0
    code, out = jdk("note", job_id, "interview", "Onsite", "loop", "--date=2099-01-01")
    assert code == 0
    assert "|2099-01-01|interview|Onsite loop" in out

    _, out = jdk("dashboard")
    assert "total: 1" in out
    assert "interview: 1" in out
    assert "Onsite loop" in out


def test_rm_clears_job(jdk):
    _, out = jdk("add", "PM", "Acme")
    job_id = out.split("|")[0]

    code, out = jdk("rm", job_id)
    assert code == 0
    _, out = jdk("list")
    assert "0 jobs" in out


def test_errors_exit_nonzero(jdk):
    code, out = jdk("move", "missing", "offer")
    assert code == 1
    assert out.startswith("ERROR: Job not found")

    code, out = jdk("move", "missing", "hired")
    assert code == 1
    assert "Invalid status" in out
