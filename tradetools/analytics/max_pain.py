"""
Max-pain aggregation over an open-interest table.

For a settlement price s, the aggregate payout option writers owe to
in-the-money holders is:

    pain(s) = Σ_{K > s} (K - s)·PutOI(K) + Σ_{K < s} (s - K)·CallOI(K)

Only the strikes listed in the table are considered as settlement
prices. Two selection conventions exist:

- "reference" (default): the strike with the LARGEST pain, as the
  original calculator selects it.
- "minimum_payout": the strike with the SMALLEST pain, the textbook
  max-pain definition.

The two disagree on most chains; see DESIGN.md.
"""

import logging
from typing import Iterable, Literal, Optional, Sequence

from tradetools.utils.types import OpenInterestRow
from tradetools.utils.validation import require_finite, require_non_negative

logger = logging.getLogger(__name__)

PainConvention = Literal["reference", "minimum_payout"]


def pain_at_strike(table: Iterable[OpenInterestRow], settlement: float) -> float:
    """Aggregate intrinsic-value payout to holders if the underlying settles here."""
    pain = 0.0
    for row in table:
        if row.strike > settlement:
            pain += (row.strike - settlement) * row.put_open_interest
        elif row.strike < settlement:
            pain += (settlement - row.strike) * row.call_open_interest
    return pain


def pain_profile(table: Sequence[OpenInterestRow]) -> list[tuple[float, float]]:
    """
    Pain at every listed strike, in table order.

    O(n²) over n strikes; option chains are small enough for this.
    """
    return [(row.strike, pain_at_strike(table, row.strike)) for row in table]


def max_pain_strike(
    table: Sequence[OpenInterestRow], convention: PainConvention = "reference"
) -> float:
    """
    Select the max-pain strike from the table.

    Ties go to the first strike in table order.

    Raises:
        ValueError: If the table is empty or convention is unknown

    Example:
        >>> rows = [OpenInterestRow(100, 0, 10), OpenInterestRow(110, 10, 0)]
        >>> max_pain_strike(rows)
        100
    """
    if convention not in ("reference", "minimum_payout"):
        raise ValueError(
            f"convention must be 'reference' or 'minimum_payout', got '{convention}'"
        )
    if not table:
        raise ValueError("Max pain requires at least one open-interest row")

    best_strike, best_pain = None, None
    for strike, pain in pain_profile(table):
        if best_pain is None:
            best_strike, best_pain = strike, pain
        elif convention == "reference" and pain > best_pain:
            best_strike, best_pain = strike, pain
        elif convention == "minimum_payout" and pain < best_pain:
            best_strike, best_pain = strike, pain

    logger.debug("Max pain (%s) at %s with pain %s", convention, best_strike, best_pain)
    return best_strike


def check_open_interest_table(table: Sequence[OpenInterestRow]) -> Optional[str]:
    if not table:
        return "Open-interest table is empty"
    for row in table:
        reason = require_finite(strike=row.strike) or require_non_negative(
            call_open_interest=row.call_open_interest,
            put_open_interest=row.put_open_interest,
        )
        if reason:
            return reason
    return None


def compute_max_pain(
    table: Sequence[OpenInterestRow], convention: PainConvention = "reference"
) -> Optional[float]:
    """Max-pain strike, or None for an empty or malformed table."""
    reason = check_open_interest_table(table)
    if reason:
        logger.debug("Max pain undefined: %s", reason)
        return None
    return max_pain_strike(table, convention)
