"""Leitura do CSV de infrações."""

from pathlib import Path
from typing import List, Union

import numpy as np
import pandas as pd

from .models import ViolationPoint

COORDINATE_COLUMNS = ("longitude", "latitude")


def load_violations(path: Union[str, Path]) -> List[ViolationPoint]:
    """Carrega o CSV e converte longitude/latitude para float (inválidos viram NaN)."""

    frame = pd.read_csv(path, dtype=str, keep_default_na=False)
    missing = [col for col in COORDINATE_COLUMNS if col not in frame.columns]
    if missing:
        raise ValueError(f"Colunas ausentes em {path}: {', '.join(missing)}")

    longitudes = _coerce(frame["longitude"])
    latitudes = _coerce(frame["latitude"])
    passenger_columns = [c for c in frame.columns if c not in COORDINATE_COLUMNS]

    points: List[ViolationPoint] = []
    for idx in range(len(frame)):
        row = frame.iloc[idx]
        points.append(
            ViolationPoint(
                index=idx,
                longitude=float(longitudes[idx]),
                latitude=float(latitudes[idx]),
                attributes={col: row[col] for col in passenger_columns},
            )
        )
    return points


def _coerce(column: pd.Series) -> np.ndarray:
    return pd.to_numeric(column.str.strip(), errors="coerce").to_numpy(
        dtype=float, na_value=np.nan
    )
