#!/usr/bin/env python3
from __future__ import annotations

import argparse
from typing import List, Optional, Tuple

import worldcal


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "worldcal[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "worldcal[diagnostics]"') from e


def parse_calendars(s: str) -> List[str]:
    out = [x.strip() for x in s.split(",") if x.strip()]
    if not (1 <= len(out) <= 4):
        raise SystemExit("--calendars must contain 1 to 4 comma-separated calendars")
    return out


def build_points(np, calendar: str, start_offset: int, years: int) -> Tuple["np.ndarray", "np.ndarray"]:
    """
    Leap flags for `years` consecutive years starting at epoch + start_offset, as
    (year offsets, year lengths).
    """
    eng = worldcal.get_calendar(calendar)
    epoch = eng.definition.epoch
    offs = np.arange(start_offset, start_offset + years, dtype=int)
    lengths = np.array([eng.get_year_length(int(epoch + k)) for k in offs], dtype=int)
    return offs, lengths


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(
        description="Leap-year barcode: one row per calendar, one cell per year, dark cells are leap years."
    )
    p.add_argument("--calendars", default="gregorian,golarion,harptos,shire")
    p.add_argument("--start", type=int, default=0, help="first year, counted from each calendar's epoch")
    p.add_argument("--years", type=int, default=400)
    p.add_argument("--out", default="leap_barcode.png")
    p.add_argument("--title", default="Leap years by calendar")
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()

    if args.years < 1:
        raise SystemExit("--years must be >= 1")

    calendars = parse_calendars(args.calendars)
    Z = np.zeros((len(calendars), args.years), dtype=float)
    for row, cal in enumerate(calendars):
        _, lengths = build_points(np, cal, args.start, args.years)
        Z[row] = lengths > lengths.min()

    fig, ax = plt.subplots(figsize=(16, 0.6 + 0.5 * len(calendars)))
    x_edges = np.arange(args.start - 0.5, args.start + args.years + 0.5, 1.0)
    y_edges = np.arange(-0.5, len(calendars) + 0.5, 1.0)
    ax.pcolormesh(x_edges, y_edges, Z, shading="flat", cmap="Greys", vmin=0, vmax=1.4)

    ax.tick_params(axis="both", which="both", length=0)
    ax.set_yticks(list(range(len(calendars))))
    ax.set_yticklabels(calendars)
    ax.set_xlabel("Years since epoch")
    ax.set_title(args.title)

    fig.tight_layout()
    fig.savefig(args.out, dpi=150)
    print(f"Wrote {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
