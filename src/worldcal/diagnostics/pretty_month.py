from __future__ import annotations

import argparse

from worldcal.cli import add_calendar_args, engine_from_args


def cell(top: str, bot: str, w: int = 6) -> tuple[str, str]:
    return (top[:w].ljust(w), bot[:w].ljust(w))


def dow_header(engine, w: int = 6) -> str:
    return " ".join((wd.abbreviation or wd.name)[:w].ljust(w) for wd in engine.definition.weekdays)


def print_grid(title: str, header: str, weeks: list[list[tuple[str, str]]], notes: list[str]) -> None:
    print(title)
    print(header)
    print("-" * len(header))
    for wk in weeks:
        print(" ".join(c[0] for c in wk))
        print(" ".join(c[1] for c in wk))
    for line in notes:
        print(line)
    print()


def month_grid(engine, year: int, month: int) -> tuple[list[list[tuple[str, str]]], list[str]]:
    """
    Week rows for a month with its attached intercalary blocks. Days outside the
    week cannot sit in the grid and are returned as notes instead.
    """
    plan = engine.year_plan(year)
    n = len(engine.definition.weekdays)
    segs = list(plan.intercalary_for(month, "before")) + [plan.month_segment(month)] + list(plan.intercalary_for(month, "after"))

    weeks: list[list[tuple[str, str]]] = []
    wk: list[tuple[str, str]] = []
    notes: list[str] = []
    for seg in segs:
        for day in range(1, seg.length + 1):
            wd = engine.weekdays.weekday_for(year, seg, day)
            if wd is None:
                notes.append(f"  * {seg.name} (day {day}): outside the week")
                continue
            if not weeks and not wk:
                wk = [cell("", "") for _ in range(wd)]
            top = f"{day:2d}"
            bot = seg.name if seg.is_intercalary else ""
            wk.append(cell(top, bot))
            if len(wk) == n:
                weeks.append(wk)
                wk = []
    if wk:
        while len(wk) < n:
            wk.append(cell("", ""))
        weeks.append(wk)
    return weeks, notes


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Print a month grid laid out on the calendar's own week.")
    p.add_argument("year", type=int, nargs="?", default=None, help="displayed year (default: epoch year)")
    p.add_argument("month", type=int, nargs="?", default=1)
    add_calendar_args(p)
    args = p.parse_args(argv)

    eng = engine_from_args(args)
    year = eng.definition.epoch if args.year is None else args.year
    name = eng.definition.months[args.month - 1].name if 1 <= args.month <= len(eng.definition.months) else "?"

    weeks, notes = month_grid(eng, year, args.month)
    leap_tag = " (leap year)" if eng.is_leap_year(year) else ""
    title = f"{eng.definition.name or eng.definition.id}  {name} {year}{leap_tag}"
    print_grid(title, dow_header(eng), weeks, notes)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
