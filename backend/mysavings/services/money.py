"""Integer-rupee arithmetic shared by the ledger and metrics layers."""

from __future__ import annotations

from ..config import settings


def div_round_half_up(numerator: int, denominator: int) -> int:
    """Exact integer division rounding halves up (67/2 -> 34). Inputs must be non-negative."""
    if denominator <= 0:
        raise ValueError("denominator must be greater than 0")
    return (2 * numerator + denominator) // (2 * denominator)


def progress_pct(saved: int, target: int) -> int:
    """Compute round(100 * saved / target) without clamping over-saved goals."""
    if target <= 0:
        raise ValueError("target must be greater than 0")
    return div_round_half_up(100 * saved, target)


def ceil_div(amount: int, parts: int) -> int:
    if parts <= 0:
        raise ValueError("parts must be greater than 0")
    return -(-amount // parts)


def format_currency(amount: int, symbol: str | None = None) -> str:
    """Format message-friendly rupee values like '₹50,000'."""
    prefix = settings.currency_symbol if symbol is None else symbol
    return f"{prefix}{amount:,}"
