"""Halaman Jemput Wakaf."""
from __future__ import annotations

from app.components.forms import render_sidebar
from app.components.list_view import render_list_screen
from app.utils.constants import EntityKind
from app.utils.log import configure_logging


def main() -> None:
    configure_logging()
    render_sidebar()
    render_list_screen(
        EntityKind.PICKUP_REQUEST,
        title="Jemput Wakaf",
        caption="Pantau permintaan jemput, jadwalkan petugas, dan tutup permintaan.",
    )


if __name__ == "__main__":
    main()
