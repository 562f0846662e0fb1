"""Centralised constants used across the application.

Entity kinds, their API resources and the status tables live here so the
UI code stays lean and unit tests can import the values without triggering
Streamlit side effects.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


class EntityKind:
    """Tags for the resources managed from the back-office."""

    DONATION = "donation"
    PICKUP_REQUEST = "pickup_request"
    CONSULTATION = "consultation"
    PROGRAM = "program"
    ARTICLE = "article"
    PARTNER = "partner"
    BANNER = "banner"
    BANK_ACCOUNT = "bank_account"
    ORGANIZATION_MEMBER = "organization_member"
    TAG = "tag"
    USER = "user"


@dataclass(frozen=True)
class ResourceInfo:
    """Small helper describing where a kind lives on the HTTP API."""

    scope: str
    resource: str
    label: str

    def path(self) -> str:
        return f"/{self.scope}/{self.resource}"


RESOURCES: Dict[str, ResourceInfo] = {
    EntityKind.DONATION: ResourceInfo("admin", "donations", "donasi"),
    EntityKind.PICKUP_REQUEST: ResourceInfo("admin", "pickup-requests", "permintaan"),
    EntityKind.CONSULTATION: ResourceInfo("admin", "consultations", "konsultasi"),
    EntityKind.PROGRAM: ResourceInfo("admin", "programs", "program"),
    EntityKind.ARTICLE: ResourceInfo("admin", "articles", "artikel"),
    EntityKind.PARTNER: ResourceInfo("admin", "partners", "mitra"),
    EntityKind.BANNER: ResourceInfo("admin", "banners", "banner"),
    EntityKind.BANK_ACCOUNT: ResourceInfo("admin", "bank-accounts", "rekening"),
    EntityKind.ORGANIZATION_MEMBER: ResourceInfo("admin", "organization-members", "anggota"),
    EntityKind.TAG: ResourceInfo("admin", "tags", "tag"),
    EntityKind.USER: ResourceInfo("superadmin", "users", "pengguna"),
}


class DonationStatus:
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    EXPIRED = "expired"
    CANCELLED = "cancelled"


class PickupStatus:
    BARU = "baru"
    DIJADWALKAN = "dijadwalkan"
    SELESAI = "selesai"
    DIBATALKAN = "dibatalkan"


class ConsultationStatus:
    BARU = "baru"
    DIBALAS = "dibalas"
    DITUTUP = "ditutup"


# Full lifecycle graph per kind, as accepted by the server.
TRANSITIONS: Dict[str, Dict[str, Tuple[str, ...]]] = {
    EntityKind.DONATION: {
        DonationStatus.PENDING: (
            DonationStatus.PAID,
            DonationStatus.FAILED,
            DonationStatus.EXPIRED,
            DonationStatus.CANCELLED,
        ),
        DonationStatus.PAID: (),
        DonationStatus.FAILED: (),
        DonationStatus.EXPIRED: (),
        DonationStatus.CANCELLED: (),
    },
    EntityKind.PICKUP_REQUEST: {
        PickupStatus.BARU: (PickupStatus.DIJADWALKAN, PickupStatus.SELESAI, PickupStatus.DIBATALKAN),
        PickupStatus.DIJADWALKAN: (PickupStatus.SELESAI, PickupStatus.DIBATALKAN),
        PickupStatus.SELESAI: (),
        PickupStatus.DIBATALKAN: (),
    },
    EntityKind.CONSULTATION: {
        ConsultationStatus.BARU: (ConsultationStatus.DIBALAS, ConsultationStatus.DITUTUP),
        ConsultationStatus.DIBALAS: (),
        ConsultationStatus.DITUTUP: (),
    },
}

INITIAL_STATUS: Dict[str, str] = {
    EntityKind.DONATION: DonationStatus.PENDING,
    EntityKind.PICKUP_REQUEST: PickupStatus.BARU,
    EntityKind.CONSULTATION: ConsultationStatus.BARU,
}

# Non-initial states that the admin surface may still move forward, with the
# successors it is allowed to offer from them.
RESTRICTED_EDITABLE: Dict[str, Dict[str, Tuple[str, ...]]] = {
    EntityKind.PICKUP_REQUEST: {PickupStatus.DIJADWALKAN: (PickupStatus.SELESAI,)},
}

# Extra fields accepted by ``PATCH .../status`` next to ``status``.
STATUS_METADATA_FIELDS: Dict[str, Tuple[str, ...]] = {
    EntityKind.DONATION: ("paid_at", "notes"),
    EntityKind.PICKUP_REQUEST: ("assigned_officer", "notes"),
    EntityKind.CONSULTATION: ("admin_notes",),
}

STATUS_LABELS: Dict[Tuple[str, str], str] = {
    (EntityKind.DONATION, DonationStatus.PENDING): "🟡 Menunggu",
    (EntityKind.DONATION, DonationStatus.PAID): "🟢 Lunas",
    (EntityKind.DONATION, DonationStatus.FAILED): "🔴 Gagal",
    (EntityKind.DONATION, DonationStatus.EXPIRED): "⚪ Kedaluwarsa",
    (EntityKind.DONATION, DonationStatus.CANCELLED): "🔴 Dibatalkan",
    (EntityKind.PICKUP_REQUEST, PickupStatus.BARU): "🟡 Baru",
    (EntityKind.PICKUP_REQUEST, PickupStatus.DIJADWALKAN): "🔵 Dijadwalkan",
    (EntityKind.PICKUP_REQUEST, PickupStatus.SELESAI): "🟢 Selesai",
    (EntityKind.PICKUP_REQUEST, PickupStatus.DIBATALKAN): "🔴 Dibatalkan",
    (EntityKind.CONSULTATION, ConsultationStatus.BARU): "🟡 Baru",
    (EntityKind.CONSULTATION, ConsultationStatus.DIBALAS): "🟢 Dibalas",
    (EntityKind.CONSULTATION, ConsultationStatus.DITUTUP): "⚪ Ditutup",
}

STATUS_TONES: Dict[Tuple[str, str], str] = {
    (EntityKind.DONATION, DonationStatus.PENDING): "#FFF6CC",
    (EntityKind.DONATION, DonationStatus.PAID): "#E8F5E9",
    (EntityKind.DONATION, DonationStatus.FAILED): "#FFEBEE",
    (EntityKind.DONATION, DonationStatus.EXPIRED): "#F1F5F9",
    (EntityKind.DONATION, DonationStatus.CANCELLED): "#FFEBEE",
    (EntityKind.PICKUP_REQUEST, PickupStatus.BARU): "#FFF6CC",
    (EntityKind.PICKUP_REQUEST, PickupStatus.DIJADWALKAN): "#E3F2FD",
    (EntityKind.PICKUP_REQUEST, PickupStatus.SELESAI): "#E8F5E9",
    (EntityKind.PICKUP_REQUEST, PickupStatus.DIBATALKAN): "#FFEBEE",
    (EntityKind.CONSULTATION, ConsultationStatus.BARU): "#FFF6CC",
    (EntityKind.CONSULTATION, ConsultationStatus.DIBALAS): "#E8F5E9",
    (EntityKind.CONSULTATION, ConsultationStatus.DITUTUP): "#F1F5F9",
}

NEUTRAL_TONE = "#F1F5F9"

PER_PAGE_OPTIONS = [10, 15, 25, 50]
