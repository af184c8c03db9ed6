"""Conversion between nominal annual rates and effective per-period rates."""

from __future__ import annotations

import math

from tvmlib.errors import NonRealResultError


def power(base: float, exponent: float) -> float:
    """``base ** exponent`` raising :class:`NonRealResultError` on overflow."""
    try:
        return base ** exponent
    except OverflowError as exc:
        raise NonRealResultError(
            f"{base} ** {exponent} overflows; no finite result"
        ) from exc


def to_effective(
    rate: float,
    is_discrete: bool,
    compound_frequency: float,
    payment_frequency: float,
) -> float:
    """Convert a nominal annual rate (percent) to the effective rate per payment period.

    Discrete:   (1 + r/100/cf)^(cf/pf) - 1
    Continuous: exp(r/100/pf) - 1
    """
    if is_discrete:
        base = 1.0 + rate / 100.0 / compound_frequency
        if base <= 0.0:
            raise NonRealResultError(
                f"Nominal rate {rate}% is at or below -100% per compounding period"
            )
        return power(base, compound_frequency / payment_frequency) - 1.0
    try:
        return math.exp(rate / 100.0 / payment_frequency) - 1.0
    except OverflowError as exc:
        raise NonRealResultError(f"Nominal rate {rate}% overflows continuous compounding") from exc


def to_nominal(
    effective_rate: float,
    is_discrete: bool,
    compound_frequency: float,
    payment_frequency: float,
) -> float:
    """Inverse of :func:`to_effective`; returns the nominal annual rate in percent."""
    base = 1.0 + effective_rate
    if base <= 0.0:
        raise NonRealResultError(
            f"Effective rate {effective_rate} must be greater than -1"
        )
    if is_discrete:
        return compound_frequency * (power(base, payment_frequency / compound_frequency) - 1.0) * 100.0
    return payment_frequency * math.log(base) * 100.0
