"""Batch solving over pandas frames."""

from __future__ import annotations

from typing import Sequence

import logging

import numpy as np
import pandas as pd

from tvmlib.calculator import solve
from tvmlib.config import TvmConfig
from tvmlib.equation import residual
from tvmlib.errors import TvmError
from tvmlib.rates import to_effective

logger = logging.getLogger(__name__)

TVM_COLUMNS: Sequence[str] = ("rate", "nper", "pmt", "pv", "fv")


def _row_params(row: pd.Series) -> dict:
    return {k: v for k, v in row.items() if not (isinstance(v, float) and np.isnan(v))}


def solve_frame(frame: pd.DataFrame, unknown: str) -> pd.Series:
    """Solve ``unknown`` for every row of ``frame``.

    Rows carry the TVM fields as columns; compounding columns (``isBeginning``,
    ``isDiscrete``, ``cf``, ``pf`` or their snake_case names) are optional and
    default per row. Rows that fail are logged and yield NaN.
    """
    values = []
    for index, row in frame.iterrows():
        try:
            values.append(solve(unknown, _row_params(row)))
        except TvmError as exc:
            logger.error("Row %s: cannot solve %s: %s", index, unknown, exc)
            values.append(np.nan)
    return pd.Series(values, index=frame.index, name=unknown, dtype=float)


def closure_residuals(frame: pd.DataFrame) -> pd.Series:
    """Evaluate the governing identity for rows holding all five TVM values."""
    missing = [c for c in TVM_COLUMNS if c not in frame.columns]
    if missing:
        raise KeyError(f"frame is missing columns: {missing}")

    effective = []
    timing = []
    for _, row in frame.iterrows():
        config = TvmConfig.from_mapping(_row_params(row))
        effective.append(
            to_effective(
                float(row["rate"]),
                config.is_discrete,
                config.compound_frequency,
                config.payment_frequency,
            )
        )
        timing.append(config.x)

    out = residual(
        frame["pv"].to_numpy(dtype=float),
        frame["fv"].to_numpy(dtype=float),
        frame["pmt"].to_numpy(dtype=float),
        frame["nper"].to_numpy(dtype=float),
        np.asarray(effective, dtype=float),
        np.asarray(timing, dtype=float),
    )
    return pd.Series(np.atleast_1d(out), index=frame.index, name="residual")
