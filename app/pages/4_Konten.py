"""Halaman konten: program, artikel, mitra, banner, rekening, anggota dan tag."""
from __future__ import annotations

import streamlit as st

from app.components.forms import render_sidebar
from app.components.list_view import render_list_screen
from app.utils.constants import EntityKind
from app.utils.log import configure_logging

CONTENT_KINDS = {
    EntityKind.PROGRAM: "Program",
    EntityKind.ARTICLE: "Artikel",
    EntityKind.PARTNER: "Mitra",
    EntityKind.BANNER: "Banner",
    EntityKind.BANK_ACCOUNT: "Rekening Bank",
    EntityKind.ORGANIZATION_MEMBER: "Anggota Organisasi",
    EntityKind.TAG: "Tag",
}


def main() -> None:
    configure_logging()
    render_sidebar()

    kind = st.radio(
        "Jenis konten",
        options=list(CONTENT_KINDS),
        format_func=CONTENT_KINDS.get,
        horizontal=True,
        key="content_kind",
    )
    # Each kind keeps its own selection; switching tabs never carries ids over.
    render_list_screen(kind, title=CONTENT_KINDS[kind])


if __name__ == "__main__":
    main()
