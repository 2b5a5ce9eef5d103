"""Diagnostics package.

- pretty_month, year_table, round_trip: always available, plain text
- leap_barcode: optional (requires the diagnostics extras: numpy, matplotlib)
"""

__all__ = ["pretty_month", "year_table", "round_trip", "leap_barcode"]
