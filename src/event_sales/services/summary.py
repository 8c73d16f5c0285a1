from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ..models.parse_result import ParseResult

"""SUMMARY line rendering for one reconcile() run."""

_CENTS = Decimal("0.01")


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # avoid scientific notation
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.3f}".rstrip("0").rstrip(".")


def render_summary_line(result: ParseResult) -> str:
    """Render a SUMMARY line from a ParseResult.

    Format:
    SUMMARY city={city|all} rows={data rows} orders={qualified} records={records}
    skipped={skipped rows} revenue={allocated revenue, 2dp} elapsed_sec={elapsed}

    Examples:
        >>> render_summary_line(ParseResult(records=[], city="dc", data_rows=3))
        'SUMMARY city=dc rows=3 orders=0 records=0 skipped=0 revenue=0.00 elapsed_sec=0'
    """
    revenue = result.total_revenue.quantize(_CENTS, rounding=ROUND_HALF_UP)
    return (
        f"SUMMARY city={result.city or 'all'} "
        f"rows={result.data_rows} "
        f"orders={result.qualified_orders} "
        f"records={len(result.records)} "
        f"skipped={len(result.skipped)} "
        f"revenue={revenue} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
