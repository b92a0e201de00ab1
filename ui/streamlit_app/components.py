"""
Components - Reusable UI components
Componentes de UI reutilizables
"""

import streamlit as st
from typing import List, Optional, Tuple


def render_header(title: str, subtitle: Optional[str] = None) -> None:
    """
    Render page header
    Renderizar cabecera de pagina

    Args:
        title: Main title
        subtitle: Optional subtitle
    """
    st.title(f"{title}")
    if subtitle:
        st.markdown(f"**{subtitle}**")
    st.markdown("---")


def render_success_message(message: str) -> None:
    """
    Render success message
    Renderizar mensaje de exito
    """
    st.success(f"Completado: {message}")


def render_error_message(message: str) -> None:
    """
    Render error message
    Renderizar mensaje de error
    """
    st.error(f"Error: {message}")


def render_notifications(messages: List[Tuple[str, str]]) -> None:
    """Render queued pass/fail notifications / Mostrar avisos encolados"""
    for level, message in messages:
        if level == "success":
            render_success_message(message)
        else:
            render_error_message(message)


def render_report(text: str) -> None:
    """
    Render the exported report with a copy control
    Mostrar el informe exportado con control de copia

    Args:
        text: Formatted report text
    """
    st.markdown("### Texto para copiar")
    st.code(text, language=None)
    st.download_button(
        label="Descargar .txt",
        data=text.encode("utf-8"),
        file_name="protocolo.txt",
        mime="text/plain",
    )
