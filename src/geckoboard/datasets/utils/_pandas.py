# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Internal pandas helpers"""

from __future__ import annotations

import datetime as _dt
from typing import Any, Dict, List

import pandas as pd


def dataframe_to_records(df: pd.DataFrame, na_as_null: bool = True) -> List[Dict[str, Any]]:
    """Convert a DataFrame to a list of dicts ready for the Datasets API.

    Timestamps become ISO 8601 strings and plain dates become ``YYYY-MM-DD``.

    :param df: Input DataFrame. Column labels are used as field identifiers.
    :param na_as_null: When True (default), missing values are sent as null, which
        optional number, money and percentage fields accept. When False, missing
        values are omitted from each dict.
    """
    records = []
    for row in df.to_dict(orient="records"):
        clean = {}
        for k, v in row.items():
            if pd.notna(v):
                # Timestamp and datetime are both date subclasses
                if isinstance(v, _dt.date):
                    v = v.isoformat()
                clean[str(k)] = v
            elif na_as_null:
                clean[str(k)] = None
        records.append(clean)
    return records
