"""Utility helpers for JSON safety and upload validation."""

import numpy as np
import pandas as pd
from typing import Union, Dict, Any, Iterable


JSONSafe = Union[int, float, list, Dict[str, Any], str, None]

ALLOWED_EXTENSIONS = {'csv'}


def safe_json_convert(obj: Any) -> JSONSafe:
    """Convert numpy/pandas values into JSON-safe Python values.

    Rules:
    - numpy scalars → native ints/floats, NaN → None
    - arrays, Series and Index → lists (recursively converted)
    - DataFrames → list of record dicts
    - mappings → dicts with string keys
    """
    if obj is None:
        return None
    if isinstance(obj, (bool, np.bool_)):
        return bool(obj)
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, (float, np.floating)):
        return None if np.isnan(obj) else float(obj)
    if isinstance(obj, (int, str)):
        return obj

    if isinstance(obj, pd.DataFrame):
        return [safe_json_convert(row) for row in obj.to_dict('records')]
    if isinstance(obj, (pd.Series, pd.Index, np.ndarray)):
        return [safe_json_convert(x) for x in obj.tolist()]

    if isinstance(obj, dict):
        return {str(k): safe_json_convert(v) for k, v in obj.items()}

    if isinstance(obj, Iterable) and not isinstance(obj, bytes):
        return [safe_json_convert(x) for x in obj]

    try:
        if pd.isna(obj):
            return None
    except (TypeError, ValueError):
        pass
    return str(obj)


def allowed_file(filename: str) -> bool:
    """Check if file extension is allowed."""
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in ALLOWED_EXTENSIONS


def validate_file_upload(file) -> tuple[bool, str]:
    """Check that an uploaded file is present and is a CSV."""
    if not file or not file.filename:
        return False, "No file selected"

    if not allowed_file(file.filename):
        return False, "Invalid file type. Only CSV files are supported."

    return True, "File validation passed"


# ---------------------------------------------------------------------------
# Features implemented in this module
# - safe_json_convert: normalize numpy/pandas objects to JSON-safe values
# - allowed_file / validate_file_upload: file presence and extension checks
# ---------------------------------------------------------------------------
