"""Compounding and payment-timing configuration."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

import math

from tvmlib.errors import InvalidInputError


def _pick(params: Mapping, keys: Iterable[str], default=None):
    for key in keys:
        if key in params and params[key] is not None:
            return params[key]
    return default


def parse_flag(name: str, value) -> bool:
    """Accept real booleans or 0/1 only; strings such as ``"false"`` are rejected."""
    if isinstance(value, (str, bytes)) or value not in (0, 1):
        raise InvalidInputError(f"{name} must be a boolean or 0/1, got {value!r}")
    return bool(value)


@dataclass(frozen=True)
class TvmConfig:
    """Compounding model shared by every solver call.

    Attributes:
        is_beginning: Payments at the start of each period (annuity-due)
        is_discrete: Discrete compounding; False selects continuous compounding
        compound_frequency: Compounding periods per year
        payment_frequency: Payment periods per year
    """

    is_beginning: bool
    is_discrete: bool
    compound_frequency: float
    payment_frequency: float

    def __post_init__(self) -> None:
        for name in ("compound_frequency", "payment_frequency"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise InvalidInputError(f"{name} must be a positive finite number, got {value!r}")

    @property
    def x(self) -> int:
        """Timing flag of the governing equation (1 for annuity-due)."""
        return 1 if self.is_beginning else 0

    @classmethod
    def from_mapping(cls, params: Mapping) -> "TvmConfig":
        """Build a config from loose parameters, filling gaps from ``DEFAULT_CONFIG``.

        Both the camelCase keys (``isBeginning``, ``isDiscrete``, ``cf``, ``pf``)
        and the attribute names are accepted.
        """
        is_beginning = _pick(params, ("is_beginning", "isBeginning"), DEFAULT_CONFIG.is_beginning)
        is_discrete = _pick(params, ("is_discrete", "isDiscrete"), DEFAULT_CONFIG.is_discrete)
        cf = _pick(params, ("compound_frequency", "cf"), DEFAULT_CONFIG.compound_frequency)
        pf = _pick(params, ("payment_frequency", "pf"), DEFAULT_CONFIG.payment_frequency)
        try:
            cf = float(cf)
            pf = float(pf)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"Frequencies must be numeric: cf={cf!r}, pf={pf!r}") from exc
        return cls(
            is_beginning=parse_flag("is_beginning", is_beginning),
            is_discrete=parse_flag("is_discrete", is_discrete),
            compound_frequency=cf,
            payment_frequency=pf,
        )


# Monthly payments, monthly discrete compounding, payments in arrears.
DEFAULT_CONFIG = TvmConfig(
    is_beginning=False,
    is_discrete=True,
    compound_frequency=12.0,
    payment_frequency=12.0,
)
