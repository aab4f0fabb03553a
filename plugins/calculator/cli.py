"""Command line interface for the calculator and compounding plugins."""

from __future__ import annotations

import argparse
import json
from typing import Any

from plugins.compound_interest.core import CompoundForm, DEFAULT_MAX_DAYS, DEFAULT_ROW_CAP

from .core import CalculatorSession, MathEngine, evaluate_once, token_for_key


def _print(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False))


def command_eval(args: argparse.Namespace) -> None:
    outcome = evaluate_once(
        args.expression,
        engine=MathEngine(angle_unit=args.angle_unit),
        log_mode=args.log_mode,
    )
    if outcome is None:
        raise SystemExit("Expression is required")
    _print(outcome.to_dict())


def command_keys(args: argparse.Namespace) -> None:
    session = CalculatorSession(history_capacity=args.history, log_mode=args.log_mode)
    ignored: list[str] = []
    for key in args.keys:
        token = token_for_key(key)
        if token is None:
            ignored.append(key)
            continue
        session.press(token)
    _print({**session.snapshot(), "ignored": ignored})


def command_compound(args: argparse.Namespace) -> None:
    form = CompoundForm(row_cap=args.row_cap, max_days=args.max_days)
    accepted = {
        "principal": form.set_principal(args.principal),
        "days": form.set_days(args.days),
        "rate": form.set_rate(args.rate),
    }
    _print(
        {
            "principal_display": form.principal_display,
            "accepted": accepted,
            "result": form.result().to_dict(),
        }
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Calculator CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    eval_parser = subparsers.add_parser("eval", help="Evaluate one expression")
    eval_parser.add_argument("expression", help="Expression as typed on the keypad (e.g. '(1+2')")
    eval_parser.add_argument("--angle-unit", default="radian", choices=["radian", "degree"])
    eval_parser.add_argument("--log-mode", default="faithful", choices=["faithful", "corrected"])
    eval_parser.set_defaults(func=command_eval)

    keys_parser = subparsers.add_parser("keys", help="Replay key names through a calculator session")
    keys_parser.add_argument("keys", nargs="+", help="Key names such as 2 + 2 Enter")
    keys_parser.add_argument("--history", type=int, default=8, help="History capacity")
    keys_parser.add_argument("--log-mode", default="faithful", choices=["faithful", "corrected"])
    keys_parser.set_defaults(func=command_keys)

    compound_parser = subparsers.add_parser("compound", help="Project daily compounding")
    compound_parser.add_argument("--principal", required=True, help="Principal, commas allowed")
    compound_parser.add_argument("--days", required=True, help="Number of days")
    compound_parser.add_argument("--rate", required=True, help="Daily rate in percent")
    compound_parser.add_argument("--row-cap", type=int, default=DEFAULT_ROW_CAP, help="Rows kept in the ledger")
    compound_parser.add_argument("--max-days", type=int, default=DEFAULT_MAX_DAYS, help="Iteration guard")
    compound_parser.set_defaults(func=command_compound)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
