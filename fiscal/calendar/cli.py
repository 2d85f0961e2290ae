import argparse
import json
import logging
import sys
from datetime import date

from fiscal.calendar.engine import calendar_rows, convert
from fiscal.calendar.errors import FiscalCalendarError
from fiscal.calendar.table import load_table
from fiscal.exports.writers import write_calendar


def _jsonable(v):
    return v.isoformat() if isinstance(v, date) else v


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="python -m fiscal.calendar.cli",
        description="Convert dates to and from the fiscal calendar.",
    )
    p.add_argument("--from", dest="from_", default="date", help="'date' or 'fiscal week' (default: date)")
    p.add_argument("--to", dest="to", help="'week beginning', 'week ending', 'fiscal week', 'fiscal month' or 'fiscal year'")
    p.add_argument("--csv", nargs=2, metavar=("START", "END"), help="print the calendar lookup table for START..END as CSV")
    p.add_argument("--calendar", dest="table_path", help="JSON calendar table (overrides FISCAL_CALENDAR_PATH)")
    p.add_argument("-v", "--verbose", action="store_true")
    p.add_argument("inputs", nargs="*", help="YYYY-MM-DD dates or WW.YYYY fiscal weeks")
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        table = load_table(args.table_path)
        if args.csv:
            sys.stdout.write(write_calendar(calendar_rows(args.csv[0], args.csv[1], table=table)))
            return 0
        if not args.to or not args.inputs:
            print("Usage: python -m fiscal.calendar.cli --from <from> --to <to> <input> [<input> ...]", file=sys.stderr)
            return 2
        value = args.inputs[0] if len(args.inputs) == 1 else args.inputs
        result = convert(value, args.from_, args.to, table=table)
    except FiscalCalendarError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    if isinstance(result, list):
        print(json.dumps([_jsonable(r) for r in result], indent=2))
    else:
        print(json.dumps(_jsonable(result)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
