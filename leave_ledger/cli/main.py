from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, LedgerConfig, load_config
from ..errors import LedgerError
from ..excel.classifier import classify_columns
from ..excel.normalizer import clean_rows
from ..excel.reader import WorkbookReadError, read_workbook
from ..logging.init import log_summary, setup_logging
from ..models.ingest_result import FileStatus
from ..models.summary import MonthlyReportRow
from ..services.ledger import LeaveLedger, scan_workbooks
from ..services.numerals import format_leave_count, to_arabic_numerals
from ..services.roster import credentials_csv, filter_employees, generate_password, generate_username
from ..services.summary import render_summary_line
from ..services.views import (
    available_years,
    ranked_groups,
    regular_and_hourly_days,
    short_sick_leaves,
    summary_table_text,
)

"""CLI entrypoint.

Subcommands:
- ingest PATH...            workbooks or directories of workbooks
- summary / ranked / sick   views over the aggregated summaries
- report YEAR MONTH         monthly balance projection
- inspect FILE              detected column roles and first cleaned rows
- employees ...             roster maintenance

Exit codes: 0 success, 2 some files rejected, 1 fatal (config/store/usage).
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

CONFIG_ENV_VAR = "LEAVE_LEDGER_CONFIG"
INSPECT_SAMPLE_ROWS = 5


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env; its values win over the inherited environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="leave-ledger", description="Leave spreadsheet ledger")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--config", type=Path, default=None, help="Config YAML (default: $LEAVE_LEDGER_CONFIG or config/leave_ledger.yml)")
    sub = p.add_subparsers(dest="command", required=True)

    ingest_p = sub.add_parser("ingest", help="Ingest workbooks")
    ingest_p.add_argument("paths", nargs="+", type=Path)

    summary_p = sub.add_parser("summary", help="Per-employee leave summary (tab separated)")
    summary_p.add_argument("--year", type=int)
    summary_p.add_argument("--month", type=int)
    summary_p.add_argument("--search", default="")

    ranked_p = sub.add_parser("ranked", help="Employees grouped by regular + hourly days")
    ranked_p.add_argument("--year", type=int)
    ranked_p.add_argument("--month", type=int)

    sick_p = sub.add_parser("sick", help="Short sick leave periods")
    sick_p.add_argument("--max-days", type=int, default=5)

    sub.add_parser("years", help="Years present in the stored records")

    report_p = sub.add_parser("report", help="Monthly balance report")
    report_p.add_argument("year", type=int)
    report_p.add_argument("month", type=int)

    inspect_p = sub.add_parser("inspect", help="Show detected columns and first cleaned rows")
    inspect_p.add_argument("file", type=Path)

    clear_p = sub.add_parser("clear", help="Delete all stored data")
    clear_p.add_argument("--yes", action="store_true", required=True)

    emp = sub.add_parser("employees", help="Roster maintenance")
    emp_sub = emp.add_subparsers(dest="employees_command", required=True)
    list_p = emp_sub.add_parser("list")
    list_p.add_argument("--search", default="")
    add_p = emp_sub.add_parser("add")
    add_p.add_argument("name")
    add_p.add_argument("--balance", type=int, required=True)
    add_p.add_argument("--username")
    add_p.add_argument("--password")
    add_p.add_argument("--workday-hours", type=int, default=7)
    add_p.add_argument("--prior-hours", type=float, default=0)
    update_p = emp_sub.add_parser("update")
    update_p.add_argument("id")
    update_p.add_argument("--name")
    update_p.add_argument("--balance", type=int)
    update_p.add_argument("--username")
    update_p.add_argument("--password")
    update_p.add_argument("--workday-hours", type=int)
    update_p.add_argument("--prior-hours", type=float)
    remove_p = emp_sub.add_parser("remove")
    remove_p.add_argument("id")
    deduct_p = emp_sub.add_parser("deduct")
    deduct_p.add_argument("--days", type=int, default=5)
    emp_sub.add_parser("credentials", help="Print name/username/password CSV")
    return p


def _resolve_config_path(args: argparse.Namespace) -> Path:
    if args.config is not None:
        return args.config
    return Path(os.getenv(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH)


def _expand_paths(paths: list[Path]) -> list[Path]:
    files: list[Path] = []
    for path in paths:
        if path.is_dir():
            files.extend(scan_workbooks(path))
        else:
            files.append(path)
    return files


def _cmd_ingest(ledger: LeaveLedger, args: argparse.Namespace) -> int:
    result = ledger.ingest_files(_expand_paths(args.paths))
    summary_line = render_summary_line(result)
    log_summary(summary_line[len("SUMMARY "):])
    rejected = result.count(FileStatus.FAILED) + result.count(FileStatus.DUPLICATE)
    return EXIT_PARTIAL_FAILURE if rejected else EXIT_SUCCESS_ALL


def _cmd_summary(ledger: LeaveLedger, args: argparse.Namespace) -> int:
    summaries = ledger.summaries_for(args.year, args.month, args.search)
    print(summary_table_text(summaries, ledger.roster))
    return EXIT_SUCCESS_ALL


def _cmd_ranked(ledger: LeaveLedger, args: argparse.Namespace) -> int:
    groups = ranked_groups(ledger.summaries_for(args.year, args.month))
    for total, members in groups.items():
        print(f"[{to_arabic_numerals(total)}]")
        for summary in members:
            print(f"  {summary.name}\t{to_arabic_numerals(regular_and_hourly_days(summary))}")
    return EXIT_SUCCESS_ALL


def _cmd_sick(ledger: LeaveLedger, args: argparse.Namespace) -> int:
    for name, item in short_sick_leaves(ledger.summaries, args.max_days):
        print(f"{name}\t{to_arabic_numerals(item.day_count)}\t{item.date_details}")
    return EXIT_SUCCESS_ALL


def _cmd_years(ledger: LeaveLedger, args: argparse.Namespace) -> int:
    for year in available_years(ledger.records):
        print(year)
    return EXIT_SUCCESS_ALL


def _report_line(index: int, row: MonthlyReportRow) -> str:
    regular = to_arabic_numerals(row.regular_leaves.count)
    if row.regular_leaves.dates:
        regular += f" ({row.regular_leaves.dates})"
    return "\t".join(
        [
            to_arabic_numerals(index),
            row.name,
            to_arabic_numerals(row.initial_balance),
            regular,
            format_leave_count(row.hourly_leaves.days, row.hourly_leaves.hours),
            row.sick_leave_range or "-",
            row.long_leave_range or "-",
            to_arabic_numerals(row.final_balance),
        ]
    )


def _cmd_report(ledger: LeaveLedger, args: argparse.Namespace) -> int:
    if not 1 <= args.month <= 12:
        print(f"report: month must be 1..12, got {args.month}", file=sys.stderr)
        return EXIT_FATAL
    print("\t".join(["ت", "اسم الموظف", "الرصيد الأولي", "الاعتيادية وتاريخها", "الزمنية (أيام/ساعات)", "المرضية", "الطويلة", "الرصيد المتبقي"]))
    for index, row in enumerate(ledger.monthly_report(args.year, args.month), start=1):
        print(_report_line(index, row))
    return EXIT_SUCCESS_ALL


def _cmd_inspect(config: LedgerConfig, args: argparse.Namespace) -> int:
    try:
        sheets = read_workbook(args.file)
    except WorkbookReadError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    rows = [row for sheet in sheets for row in sheet.rows]
    print(f"FILE: {args.file.name}")
    for sheet in sheets:
        print(f"  SHEET: {sheet.sheet_name} cols={sheet.columns} rows={len(sheet.rows)}")
    try:
        roles = classify_columns(rows, config.sample_size)
    except LedgerError as e:
        print(f"  roles: {e}")
        return EXIT_PARTIAL_FAILURE
    for role in ("name", "date", "day", "type", "value"):
        print(f"  {role} -> {getattr(roles, role)}")
    cleaned = clean_rows(rows, roles)
    print(f"  cleaned_rows={len(cleaned.records)}")
    for record in cleaned.records[:INSPECT_SAMPLE_ROWS]:
        print(f"    {record.to_dict()}")
    return EXIT_SUCCESS_ALL


def _cmd_employees(ledger: LeaveLedger, args: argparse.Namespace) -> int:
    command = args.employees_command
    if command == "list":
        for e in filter_employees(ledger.roster, args.search):
            print(f"{e.id}\t{e.name}\t{e.balance}\t{e.username}\t{e.workday_hours}")
    elif command == "add":
        employee = ledger.add_employee(
            args.name,
            args.balance,
            args.username or generate_username(),
            args.password or generate_password(),
            workday_hours=args.workday_hours,
            prior_hourly_balance=args.prior_hours,
        )
        print(f"{employee.id}\t{employee.username}\t{employee.password}")
    elif command == "update":
        fields = {
            "name": args.name,
            "balance": args.balance,
            "username": args.username,
            "password": args.password,
            "workday_hours": args.workday_hours,
            "prior_hourly_balance": args.prior_hours,
        }
        ledger.update_employee(args.id, **{k: v for k, v in fields.items() if v is not None})
    elif command == "remove":
        ledger.remove_employee(args.id)
    elif command == "deduct":
        ledger.deduct_balance(args.days)
    elif command == "credentials":
        print(credentials_csv(ledger.roster))
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # only fall back to sys.argv for None; [] is an explicit empty argv
    if argv is None:
        argv = sys.argv[1:]
    args = _build_parser().parse_args(argv)
    if args.debug:
        setup_logging(debug=True)
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"))
    config_path = _resolve_config_path(args)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.command == "inspect":
        return _cmd_inspect(cfg, args)

    handlers = {
        "ingest": _cmd_ingest,
        "summary": _cmd_summary,
        "ranked": _cmd_ranked,
        "sick": _cmd_sick,
        "years": _cmd_years,
        "report": _cmd_report,
        "employees": _cmd_employees,
    }
    try:
        ledger = LeaveLedger.from_config(cfg)
        if args.command == "clear":
            ledger.clear_all()
            logger.info("all stored data cleared")
            return EXIT_SUCCESS_ALL
        return handlers[args.command](ledger, args)
    except LedgerError as e:
        logger.error(str(e))
        return EXIT_FATAL
