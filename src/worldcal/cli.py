from __future__ import annotations

import argparse
import importlib
import inspect
import json
import re
import sys

_DATE_RE = re.compile(r"^(-?\d+)-(\d+)-(\d+)$")
_TIME_RE = re.compile(r"^(\d+):(\d+)(?::(\d+))?$")


def _parse_ymd(s: str) -> tuple[int, int, int]:
    m = _DATE_RE.match(s)
    if not m:
        raise SystemExit(f"Expected YEAR-MONTH-DAY, got {s!r}")
    return int(m.group(1)), int(m.group(2)), int(m.group(3))


def _parse_hms(s: str) -> tuple[int, int, int]:
    m = _TIME_RE.match(s)
    if not m:
        raise SystemExit(f"Expected H:M or H:M:S, got {s!r}")
    return int(m.group(1)), int(m.group(2)), int(m.group(3) or 0)


def _parse_anchor(s: str) -> float:
    """Unix timestamp, or a real-world UTC date YYYY-MM-DD meaning its midnight."""
    from worldcal.core.time import civil_to_timestamp

    m = _DATE_RE.match(s)
    if m:
        return civil_to_timestamp(int(m.group(1)), int(m.group(2)), int(m.group(3)))
    try:
        return float(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected a Unix timestamp or YYYY-MM-DD, got {s!r}") from None


def add_calendar_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--calendar", default="gregorian", help="built-in calendar name (see `worldcal list`)")
    p.add_argument("--calendar-file", default=None, help="JSON calendar definition; overrides --calendar")


def engine_from_args(args: argparse.Namespace):
    """Engine selected by --calendar / --calendar-file."""
    import worldcal

    if args.calendar_file:
        with open(args.calendar_file, encoding="utf-8") as fh:
            return worldcal.make_engine(json.load(fh))
    return worldcal.get_calendar(args.calendar)


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def cmd_date(argv: list[str]) -> int:
    from worldcal.attributes.registry import compute_attributes
    from dataclasses import replace

    p = argparse.ArgumentParser(prog="worldcal date", description="World time -> calendar date")
    p.add_argument("world_time", type=float, help="seconds since the start of the start year")
    p.add_argument("--anchor", type=_parse_anchor, default=None, help="anchor Unix timestamp or UTC date YYYY-MM-DD")
    p.add_argument("--debug", action="store_true")
    p.add_argument("--attr", action="append", default=[], help="attribute name (repeatable)")
    add_calendar_args(p)
    args = p.parse_args(argv)

    eng = engine_from_args(args)
    d = eng.world_time_to_date(args.world_time, args.anchor)
    info = eng.date_info(d, debug=args.debug)
    if args.attr:
        info = replace(info, attributes=compute_attributes(eng, info, args.attr))
    print(info)
    return 0


def cmd_time(argv: list[str]) -> int:
    from worldcal.core.types import CalendarDate

    p = argparse.ArgumentParser(prog="worldcal time", description="Calendar date -> world time")
    p.add_argument("date", help="YEAR-MONTH-DAY (displayed year)")
    p.add_argument("--at", default="0:00:00", help="time of day H:M[:S]")
    p.add_argument("--intercalary", default=None, help="name of the intercalary block the day belongs to")
    p.add_argument("--anchor", type=_parse_anchor, default=None, help="anchor Unix timestamp or UTC date YYYY-MM-DD")
    p.add_argument("--clamp", action="store_true", help="clamp out-of-range fields instead of failing")
    add_calendar_args(p)
    args = p.parse_args(argv)

    y, m, d = _parse_ymd(args.date)
    date = CalendarDate(y, m, d, intercalary=args.intercalary).with_time(*_parse_hms(args.at))
    eng = engine_from_args(args)
    print(eng.date_to_world_time(date, args.anchor, policy="clamp" if args.clamp else "raise"))
    return 0


def cmd_year(argv: list[str]) -> int:
    import worldcal

    p = argparse.ArgumentParser(prog="worldcal year", description="Layout of one year")
    p.add_argument("year", type=int, help="displayed year")
    add_calendar_args(p)
    args = p.parse_args(argv)

    if args.calendar_file:
        name = "__cli__"
        worldcal.register_calendar(name, engine_from_args(args), overwrite=True)
    else:
        name = args.calendar
    print(json.dumps(worldcal.year_info(args.year, calendar=name), indent=2, ensure_ascii=False))
    return 0


def cmd_list(argv: list[str]) -> int:
    import worldcal

    p = argparse.ArgumentParser(prog="worldcal list", description="List built-in calendars")
    p.add_argument("--verbose", "-v", action="store_true")
    args = p.parse_args(argv)

    for name in worldcal.list_calendars():
        if args.verbose:
            info = worldcal.calendar_info(name)
            print(f"{name:12s} {info['name']}  ({info['common_year_length']}/{info['leap_year_length']} days)")
        else:
            print(name)
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    p = argparse.ArgumentParser(prog="worldcal", description="Fantasy and real-world calendar toolkit CLI.")
    sub = p.add_subparsers(dest="cmd", required=True)

    # conversions
    sub.add_parser("date", help="World time -> calendar date", add_help=False)
    sub.add_parser("time", help="Calendar date -> world time", add_help=False)
    sub.add_parser("year", help="Print the layout of a year", add_help=False)
    sub.add_parser("list", help="List built-in calendars", add_help=False)

    # diagnostics
    sub.add_parser("pretty-month", help="Print a month grid (diagnostics)", add_help=False)
    sub.add_parser("year-table", help="Print a table of years (diagnostics)", add_help=False)

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument(
        "tool",
        choices=["round-trip", "leap-barcode"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)

    if args.cmd == "date":
        return cmd_date(rest)

    if args.cmd == "time":
        return cmd_time(rest)

    if args.cmd == "year":
        return cmd_year(rest)

    if args.cmd == "list":
        return cmd_list(rest)

    if args.cmd == "pretty-month":
        return _run_module_main("worldcal.diagnostics.pretty_month", rest)

    if args.cmd == "year-table":
        return _run_module_main("worldcal.diagnostics.year_table", rest)

    if args.cmd == "diag":
        tool_map = {
            "round-trip": "worldcal.diagnostics.round_trip",
            "leap-barcode": "worldcal.diagnostics.leap_barcode",
        }
        return _run_module_main(tool_map[args.tool], rest)

    raise RuntimeError("unreachable")


if __name__ == "__main__":
    raise SystemExit(main())
