from __future__ import annotations

import argparse

from worldcal.cli import add_calendar_args, engine_from_args


def year_row(engine, year: int) -> list[str]:
    first = engine.from_ordinal(engine.lengths.days_before(year))
    wd = first.weekday
    wd_name = engine.definition.weekdays[wd].name if wd is not None else "-"
    y = engine.definition.year
    return [
        f"{y.prefix}{year}{y.suffix}",
        "L" if engine.is_leap_year(year) else "",
        str(engine.get_year_length(year)),
        wd_name,
        str(engine.lengths.days_before(year)),
    ]


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        description="Print a table of years: leap flag, length, weekday of the first day and ordinal."
    )
    p.add_argument("--from-year", type=int, default=None, help="default: epoch year")
    p.add_argument("--to-year", type=int, default=None, help="default: from-year + 20")
    add_calendar_args(p)
    args = p.parse_args(argv)

    eng = engine_from_args(args)
    Y0 = eng.definition.epoch if args.from_year is None else args.from_year
    Y1 = Y0 + 20 if args.to_year is None else args.to_year
    if Y1 < Y0:
        raise SystemExit("--to-year must be >= --from-year")

    headers = ["Year", "Leap", "Days", "First weekday", "Ordinal"]
    rows = [year_row(eng, Y) for Y in range(Y0, Y1 + 1)]
    colw = [max(len(h), *(len(r[i]) for r in rows)) for i, h in enumerate(headers)]

    print("  ".join(h.ljust(w) for h, w in zip(headers, colw)))
    print("  ".join("-" * w for w in colw))
    for r in rows:
        print("  ".join(c.ljust(w) for c, w in zip(r, colw)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
