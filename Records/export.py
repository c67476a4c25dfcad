# backend/Records/export.py
from datetime import datetime, timezone
from io import BytesIO
from typing import Iterable

import pandas as pd
from sqlmodel import SQLModel

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _flatten(value):
    # JSON list columns (recipients) → "a, b"
    if isinstance(value, (list, tuple)):
        return ", ".join(map(str, value))
    if isinstance(value, datetime) and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def table_to_dataframe(rows: Iterable[SQLModel], model: type) -> pd.DataFrame:
    columns = list(model.model_fields)
    df = pd.DataFrame([row.model_dump() for row in rows], columns=columns)
    if not df.empty:
        df = df.apply(lambda col: col.map(_flatten))
    # Excel has no time zones: write the UTC wall time
    for col in df.columns:
        if isinstance(df[col].dtype, pd.DatetimeTZDtype):
            df[col] = df[col].dt.tz_convert(None)
    return df


def table_to_xlsx(rows: Iterable[SQLModel], model: type, sheet_name: str = "Export") -> BytesIO:
    """Schrijf de rijen als Excel-bestand naar een geheugen-buffer."""
    buf = BytesIO()
    table_to_dataframe(rows, model).to_excel(buf, index=False, sheet_name=sheet_name, engine="openpyxl")
    buf.seek(0)
    return buf
