"""Helpers for turning API rows into the tables shown on the list screens."""
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping

import pandas as pd

from app.models.lifecycle import has_lifecycle, is_deletable, normalise_status, status_label
from app.state.selection import EntityId, SelectionStore
from app.utils.constants import EntityKind

SELECT_COLUMN = "PILIH"
ID_COLUMN = "ID"
STATUS_COLUMN = "STATUS"
LOCK_COLUMN = "TERKUNCI"

LIST_COLUMNS: Dict[str, Dict[str, str]] = {
    EntityKind.DONATION: {
        "donation_code": "Kode",
        "donor_name": "Donatur",
        "amount": "Nominal",
        "payment_source": "Sumber",
        "created_at": "Dibuat",
    },
    EntityKind.PICKUP_REQUEST: {
        "donor_name": "Donatur",
        "donor_phone": "Telepon",
        "city": "Kota",
        "zakat_type": "Jenis",
        "assigned_officer": "Petugas",
        "created_at": "Dibuat",
    },
    EntityKind.CONSULTATION: {
        "name": "Nama",
        "phone": "Telepon",
        "topic": "Topik",
        "created_at": "Dibuat",
    },
    EntityKind.PROGRAM: {"title": "Judul", "category": "Kategori", "status": "Status", "target_amount": "Target"},
    EntityKind.ARTICLE: {"title": "Judul", "category": "Kategori", "status": "Status", "author_name": "Penulis"},
    EntityKind.PARTNER: {"name": "Nama", "url": "Tautan", "is_active": "Aktif"},
    EntityKind.BANNER: {"image_path": "Gambar", "display_order": "Urutan"},
    EntityKind.BANK_ACCOUNT: {"bank_name": "Bank", "account_number": "No. Rekening", "account_name": "Atas Nama"},
    EntityKind.ORGANIZATION_MEMBER: {"name": "Nama", "position_title": "Jabatan", "group": "Grup"},
    EntityKind.TAG: {"name": "Nama", "slug": "Slug"},
    EntityKind.USER: {"name": "Nama", "email": "E-mail", "is_active": "Aktif"},
}


def states_by_id(items: Iterable[Mapping[str, Any]]) -> Dict[EntityId, str]:
    """Map each row id to its normalised status."""

    return {item["id"]: normalise_status(item.get("status")) for item in items if "id" in item}


def build_list_dataframe(kind: str, items: List[Mapping[str, Any]], selection: SelectionStore) -> pd.DataFrame:
    """Build the editor table for *items*, with the selection checkbox first."""

    columns = LIST_COLUMNS.get(kind, {})
    lifecycle = has_lifecycle(kind)
    records = []
    for item in items:
        if "id" not in item:
            continue
        record: Dict[str, Any] = {SELECT_COLUMN: selection.is_selected(item["id"]), ID_COLUMN: item["id"]}
        for field, header in columns.items():
            record[header] = item.get(field)
        if lifecycle:
            record[STATUS_COLUMN] = status_label(kind, item.get("status"))
            record[LOCK_COLUMN] = not is_deletable(kind, item.get("status"))
        records.append(record)

    headers = [SELECT_COLUMN, ID_COLUMN, *columns.values()]
    if lifecycle:
        headers += [STATUS_COLUMN, LOCK_COLUMN]
    return pd.DataFrame(records, columns=headers)
