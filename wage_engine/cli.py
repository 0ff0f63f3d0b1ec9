from __future__ import annotations

import argparse
import json
import logging
import os
from datetime import date
from pathlib import Path
from typing import Any, Sequence

from .calculator import calculate_wages
from .errors import SettingsUnavailable
from .logging_utils import install_redacting_filter
from .models import PayFrequency
from .payroll_run import calculate_all_wages
from .rules import build_rules_version_payload
from .store import InMemoryPayrollStore

EXIT_SETTINGS_UNAVAILABLE = 2


def _date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid date '{value}', expected YYYY-MM-DD") from exc


def _add_period_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--data", required=True, metavar="PATH", help="JSON file with staff, settings and timesheets.")
    parser.add_argument("--start", required=True, type=_date, help="First day of the pay period.")
    parser.add_argument("--end", required=True, type=_date, help="Last day of the pay period.")
    parser.add_argument(
        "--frequency",
        choices=[f.value for f in PayFrequency],
        default=PayFrequency.MONTHLY.value,
        help="Threshold column used for NI and student loan (default: monthly).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hgv-wages", description="UK wage calculations from approved timesheets.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log progress to stderr.")
    sub = parser.add_subparsers(dest="command", required=True)

    calc = sub.add_parser("calculate", help="Calculate wages for one staff member.")
    _add_period_arguments(calc)
    calc.add_argument("--staff", required=True, metavar="ID", help="Staff member id.")

    run = sub.add_parser("run", help="Calculate wages for every active staff member.")
    _add_period_arguments(run)

    sub.add_parser("rules", help="Print the rules version and document hashes.")

    serve = sub.add_parser("serve", help="Run the HTTP API with uvicorn.")
    serve.add_argument("--host", default=os.getenv("HOST", "0.0.0.0"))
    serve.add_argument("--port", type=int, default=int(os.getenv("PORT", "8010")))
    return parser


def _emit(payload: Any) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    install_redacting_filter()

    if args.command == "rules":
        _emit(build_rules_version_payload())
        return 0

    if args.command == "serve":
        import uvicorn

        uvicorn.run("wage_engine.main:app", host=args.host, port=args.port)
        return 0

    if args.start > args.end:
        parser.error("--start must not be after --end")
    data_file = Path(args.data)
    if not data_file.exists():
        parser.error(f"data file not found: {data_file}")
    store = InMemoryPayrollStore.from_json(data_file)
    frequency = PayFrequency(args.frequency)

    if args.command == "calculate":
        try:
            result = calculate_wages(
                args.staff,
                args.start,
                args.end,
                settings=store,
                timesheets=store,
                pay_frequency=frequency,
            )
        except SettingsUnavailable as exc:
            _emit({"error": "settings_unavailable", "staff_member_id": exc.staff_member_id, "missing": list(exc.missing)})
            return EXIT_SETTINGS_UNAVAILABLE
        _emit(result.to_dict())
        return 0

    summary = calculate_all_wages(args.start, args.end, store=store, pay_frequency=frequency)
    _emit(summary.to_dict())
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
