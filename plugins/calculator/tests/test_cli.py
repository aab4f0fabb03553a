"""Smoke tests for the calculator CLI."""

from __future__ import annotations

import json
from contextlib import redirect_stdout
from io import StringIO

from plugins.calculator import cli


def _run_cli(args: list[str]) -> dict[str, object]:
    buffer = StringIO()
    with redirect_stdout(buffer):
        cli.main(args)
    return json.loads(buffer.getvalue().strip())


def test_cli_eval():
    payload = _run_cli(["eval", "(1+2"])
    assert payload["result"] == "3"
    assert payload["normalized"] == "(1+2)"


def test_cli_keys_replays_session():
    payload = _run_cli(["keys", "2", "+", "2", "Enter", "*", "3", "Enter", "Tab"])
    assert payload["expression"] == "12"
    assert len(payload["history"]) == 2
    assert payload["ignored"] == ["Tab"]


def test_cli_compound():
    payload = _run_cli(["compound", "--principal", "1,000,000", "--days", "1", "--rate", "0.8"])
    assert payload["principal_display"] == "1,000,000"
    assert payload["result"]["final_total"] == 1_008_000
    assert payload["result"]["final_total_display"] == "1,008,000"
