from __future__ import annotations

import argparse
import random
from typing import List

import worldcal


def parse_calendars(s: str) -> List[str]:
    # "gregorian,harptos" -> ["gregorian", "harptos"]
    return [x.strip() for x in s.split(",") if x.strip()]


def roundtrip_test(
    calendar: str,
    N: int,
    span_years: int,
    seed: int,
    *,
    max_failures: int,
) -> int:
    """
    world time -> date -> world time must be the identity on whole seconds, and
    later world times must never map to earlier dates.
    """
    rng = random.Random(seed)
    eng = worldcal.get_calendar(calendar)
    spd = eng.definition.time.seconds_per_day
    limit = span_years * eng.lengths.common_length * spd
    failures = 0

    for _ in range(N):
        wt = rng.randint(-limit, limit)
        d = eng.world_time_to_date(wt)
        back = eng.date_to_world_time(d)
        if back != wt:
            failures += 1
            print("\nFAIL (round trip)")
            print("calendar:", calendar)
            print("world time:", wt)
            print("date:", d)
            print("back:", back)
            print("explain:", eng.explain(d))
            if failures >= max_failures:
                return failures

        step = rng.randint(1, 3 * spd)
        if eng.compare(d, eng.world_time_to_date(wt + step)) > 0:
            failures += 1
            print("\nFAIL (monotonic)")
            print("calendar:", calendar)
            print("world time:", wt, "step:", step)
            if failures >= max_failures:
                return failures

    return failures


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Random round-trip tests: world time -> date -> world time.")
    p.add_argument("--calendars", type=str, default=",".join(worldcal.list_calendars()),
                   help="Comma-separated calendar list.")
    p.add_argument("--N", type=int, default=2000, help="Trials per calendar.")
    p.add_argument("--span-years", type=int, default=5000, help="Sample world times within +/- this many years.")
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--max-failures", type=int, default=5, help="Stop after this many failures per calendar.")
    args = p.parse_args(argv)

    total = 0
    for cal in parse_calendars(args.calendars):
        fails = roundtrip_test(cal, args.N, args.span_years, args.seed, max_failures=args.max_failures)
        status = "OK" if fails == 0 else f"{fails} failure(s)"
        print(f"{cal:12s} N={args.N:<6d} {status}")
        total += fails
    return 1 if total else 0


if __name__ == "__main__":
    raise SystemExit(main())
