# utils/telemetry_table.py
from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd

from core.settings import METRIC_UNIT_SETTINGS
from core.unit_converter import Metric, convert_value


def format_telemetry_frame(df: pd.DataFrame, settings: Any) -> pd.DataFrame:
    """
    Convert a frame of raw SI samples (one column per metric key) into display text.

    ``settings`` is anything with ``get(name)``: a SettingsStore or a plain dict.
    Non-finite samples (NaN, inf, junk) count as missing. Columns that are not
    telemetry metrics are copied through untouched.
    """
    out = pd.DataFrame(index=df.index)
    for column in df.columns:
        metric = Metric.lookup(column)
        if metric is None:
            out[column] = df[column]
            continue
        name = METRIC_UNIT_SETTINGS.get(metric)
        unit = settings.get(name) if name else None
        raw = pd.to_numeric(df[column], errors="coerce").to_numpy(dtype=float)
        raw = np.where(np.isfinite(raw), raw, np.nan)
        out[column] = [convert_value(metric, x, unit).text for x in raw]
    return out
