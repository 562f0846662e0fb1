"""Streamlit entrypoint for the back-office panel."""
from __future__ import annotations

import streamlit as st

from app.components.forms import render_sidebar
from app.settings import BATCH_CONCURRENCY, PAGE_ICON, PAGE_LAYOUT, PAGE_TITLE
from app.state.session import handle_full_reset, trigger_full_reset
from app.utils.log import configure_logging


def configure_page() -> None:
    st.set_page_config(page_title=PAGE_TITLE, page_icon=PAGE_ICON, layout=PAGE_LAYOUT)


def main() -> None:
    configure_page()
    configure_logging()
    handle_full_reset()

    st.title(PAGE_TITLE)
    st.caption("Kelola donasi, jemput wakaf, konsultasi, konten, dan pengguna dari satu tempat.")
    st.markdown(
        f"""
        Gunakan menu samping untuk berpindah halaman:

        * **Donasi**: verifikasi dan hapus donasi yang masih menunggu.
        * **Jemput Wakaf**: jadwalkan petugas dan tandai penjemputan selesai.
        * **Konsultasi**: balas atau tutup konsultasi.
        * **Konten**: program, artikel, mitra, banner, rekening, anggota, dan tag.
        * **Pengguna**: akun admin dan editor.

        Aksi massal berjalan paralel (maksimal {BATCH_CONCURRENCY} permintaan sekaligus).
        Data yang gagal diproses tetap terpilih agar bisa dicoba lagi.
        """
    )

    render_sidebar()

    st.divider()
    if st.button("♻️ Reset semua pilihan dan filter"):
        trigger_full_reset()
        st.rerun()


if __name__ == "__main__":  # pragma: no cover - Streamlit entry-point
    main()
