"""Halaman Konsultasi ZISWAF."""
from __future__ import annotations

from app.components.forms import render_sidebar
from app.components.list_view import render_list_screen
from app.utils.constants import EntityKind
from app.utils.log import configure_logging


def main() -> None:
    configure_logging()
    render_sidebar()
    render_list_screen(
        EntityKind.CONSULTATION,
        title="Konsultasi ZISWAF",
        caption="Balas atau tutup konsultasi yang masuk.",
    )


if __name__ == "__main__":
    main()
