import json
import math
import os
from typing import Any, Dict, List

import pandas as pd

from .parser import PUZZLE_KEYS
from src.utils.io import load_json

SUPPORTED_SUFFIXES = (".json", ".txt", ".csv", ".parquet")


def _coerce_plain(value: Any) -> Any:
    """Turn nested numpy arrays and scalars from pandas into plain Python values."""
    if hasattr(value, "tolist"):
        value = value.tolist()
    if isinstance(value, (list, tuple)):
        return [_coerce_plain(v) for v in value]
    # Integer lists holding nulls come back from pyarrow as floats with NaN.
    if isinstance(value, float):
        if math.isnan(value):
            return None
        if value.is_integer():
            return int(value)
    return value


def load_puzzle(file_path: str) -> Dict[str, Any]:
    """
    Reads one puzzle from a file. Handles .json, .txt, .csv and .parquet.
    Returns a raw puzzle dictionary {"id": ..., "grid": ...} for `parse_puzzle`.
    Only the first record of multi-record sources is used.
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File not found: {file_path}")

    default_id = os.path.splitext(os.path.basename(file_path))[0]

    def _normalize_record(record: Dict[str, Any]) -> Dict[str, Any]:
        for key in PUZZLE_KEYS:
            value = record.get(key)
            if value is not None:
                return {"id": str(record.get("id") or default_id), "grid": value}
        raise ValueError(f"No puzzle grid found in {file_path}")

    # Case 1: Parquet File (Binary)
    if file_path.endswith(".parquet"):
        df = pd.read_parquet(file_path)
        if df.empty:
            raise ValueError(f"No puzzle rows in {file_path}")
        record = {k: _coerce_plain(v) for k, v in df.iloc[0].to_dict().items()}
        return _normalize_record(record)

    # Case 2: CSV File, nine rows of nine cells with no header
    if file_path.endswith(".csv"):
        df = pd.read_csv(
            file_path,
            header=None,
            dtype=str,
            keep_default_na=False,
            skipinitialspace=True,
        )
        rows: List[List[str]] = df.values.tolist()
        return {"id": default_id, "grid": rows}

    # Case 3: JSON File (object with a grid, a list of such objects, or a bare 9x9 array)
    if file_path.endswith(".json"):
        try:
            payload = load_json(file_path)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {file_path}: {e}") from e
        if isinstance(payload, dict):
            return _normalize_record(payload)
        if isinstance(payload, list) and payload and isinstance(payload[0], dict):
            return _normalize_record(payload[0])
        if isinstance(payload, (list, str)):
            return {"id": default_id, "grid": payload}
        raise ValueError(f"Unsupported JSON puzzle layout in {file_path}")

    # Case 4: Plain text board
    if file_path.endswith(".txt"):
        with open(file_path, "r", encoding="utf-8") as f:
            return {"id": default_id, "grid": f.read()}

    raise ValueError(
        f"Unsupported puzzle file {file_path}; expected one of {', '.join(SUPPORTED_SUFFIXES)}"
    )
