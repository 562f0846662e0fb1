"""Utilities that prepare CSV payloads for download."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

import pandas as pd

from app.models.entity import LOCK_COLUMN, SELECT_COLUMN

DROP_AUX_COLUMNS = [SELECT_COLUMN, LOCK_COLUMN]


@dataclass
class CsvPayload:
    kind: str
    rows: int
    file_name: str
    content: bytes


def _drop_auxiliary_columns(df: pd.DataFrame) -> pd.DataFrame:
    present = [c for c in DROP_AUX_COLUMNS if c in df.columns]
    return df.drop(columns=present, errors="ignore")


def _filter_selection(df: pd.DataFrame, *, selected_only: bool) -> pd.DataFrame:
    if not selected_only or SELECT_COLUMN not in df.columns:
        return df
    return df[df[SELECT_COLUMN].fillna(False).astype(bool)].copy()


def generate_csv_payload(
    df: pd.DataFrame,
    kind: str,
    *,
    selected_only: bool = False,
    sep: str = ";",
    now: datetime | None = None,
) -> CsvPayload | None:
    """Turn the visible rows of a list screen into a CSV download.

    Returns ``None`` when nothing is left to export.
    """

    if df.empty:
        return None

    working = _filter_selection(df, selected_only=selected_only)
    if working.empty:
        return None

    working = _drop_auxiliary_columns(working)
    csv_str = working.to_csv(index=False, sep=sep, na_rep="")
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M")
    return CsvPayload(
        kind=kind,
        rows=len(working),
        file_name=f"{kind}_{stamp}.csv",
        content=csv_str.encode("utf-8-sig"),
    )
