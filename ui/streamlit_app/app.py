"""
Main Streamlit Application - Consultation form with text export
Aplicacion principal de Streamlit - Formulario de consulta con exportacion de texto
"""

import asyncio
import logging
import sys
from pathlib import Path

import streamlit as st

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from formtext.layout_loader import list_available_layouts, load_layout

from ui.streamlit_app.components import render_header, render_notifications, render_report
from ui.streamlit_app.form_renderer import FormRenderer
from ui.streamlit_app.state_store import (
    clear_widget_state,
    get_clipboard_text,
    get_page,
    init_session_state,
    pop_notifications,
    reset_page,
)

# Layout configuration
DEFAULT_LAYOUT_ID = "consulta_general"

logger = logging.getLogger(__name__)


def render_actions_sidebar() -> None:
    """
    Render export and storage actions in sidebar
    Renderizar acciones de exportacion y almacenamiento en barra lateral
    """
    page = get_page()

    with st.sidebar:
        st.markdown("## Acciones")
        st.markdown("---")

        if st.button("Copiar texto", key="copy_btn", type="primary"):
            result = asyncio.run(page.copy_form_text())
            logger.info("Export %s finished: success=%s", result.trace_id[:8], result.success)

        if st.button("Guardar", key="save_btn"):
            if page.save_to_storage():
                page.notifier.success("Datos del formulario guardados")
            else:
                page.notifier.failure("No se pudieron guardar los datos")

        if st.button("Cargar", key="load_btn"):
            if page.load_from_storage():
                clear_widget_state()
                page.notifier.success("Datos del formulario cargados")
            else:
                page.notifier.failure("No hay datos guardados validos")

        st.markdown("---")
        if st.button("Borrar datos guardados", key="clear_btn"):
            if page.clear_storage():
                reset_page()

        st.markdown("---")
        errors = page.fields.errors()
        if errors:
            st.markdown(f"**Campos pendientes:** {len(errors)}")


def main():
    """Main application entry point / Punto de entrada principal de la aplicacion"""
    st.set_page_config(page_title="Protocolo de consulta", layout="wide")

    layouts = list_available_layouts()
    layout_id = DEFAULT_LAYOUT_ID if DEFAULT_LAYOUT_ID in layouts else (layouts[0] if layouts else None)
    if layout_id is None:
        st.error("No hay disenos de formulario disponibles")
        return

    init_session_state(layout_id)
    layout = load_layout(st.session_state.layout_id)

    render_header(layout.get_name(), layout.manifest.get("description"))
    render_actions_sidebar()
    render_notifications(pop_notifications())

    FormRenderer(get_page()).render_form()

    text = get_clipboard_text()
    if text:
        st.markdown("---")
        render_report(text)


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    main()
