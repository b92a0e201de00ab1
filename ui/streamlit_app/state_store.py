"""
State Store - Session state management for Streamlit
Gestion del estado de sesion para Streamlit
"""

import streamlit as st
from pathlib import Path
from typing import List, Optional, Tuple

from formtext.layout_loader import build_page, load_layout
from formtext.page import Page
from formtext.storage import JsonFileStore

DATA_DIR = Path(__file__).parent.parent.parent / "data" / "storage"
WIDGET_PREFIX = "field_"


class SessionClipboard:
    """Clipboard capability backed by session state / Portapapeles de sesion"""

    async def write_text(self, text: str) -> None:
        st.session_state.clipboard_text = text


class SessionNotifier:
    """
    Queues pass/fail messages until the next render
    Encola mensajes de exito/error hasta el siguiente renderizado
    """

    def success(self, message: str) -> None:
        st.session_state.notifications.append(("success", message))

    def failure(self, message: str, error: Optional[BaseException] = None) -> None:
        text = f"{message}: {error}" if error else message
        st.session_state.notifications.append(("error", text))


def init_session_state(layout_id: str) -> None:
    """
    Initialize session state
    Inicializar estado de sesion

    Args:
        layout_id: ID of the layout being used
    """
    if "layout_id" not in st.session_state:
        st.session_state.layout_id = layout_id

    if "notifications" not in st.session_state:
        st.session_state.notifications = []

    if "clipboard_text" not in st.session_state:
        st.session_state.clipboard_text = None

    if "page" not in st.session_state:
        st.session_state.page = create_page(st.session_state.layout_id)


def create_page(layout_id: str) -> Page:
    """Build a fresh page for the layout / Construir una pagina nueva"""
    layout = load_layout(layout_id)
    return build_page(
        layout,
        store=JsonFileStore(DATA_DIR),
        clipboard=SessionClipboard(),
        notifier=SessionNotifier(),
    )


def get_page() -> Page:
    return st.session_state.page


def reset_page() -> None:
    """Rebuild the page from its layout and drop widget state"""
    clear_widget_state()
    st.session_state.page = create_page(st.session_state.layout_id)
    st.session_state.clipboard_text = None


def get_stable_key(field_name: str, index: Optional[int] = None, sub_field: Optional[str] = None) -> str:
    """
    Generate stable widget key
    Generar clave estable de widget

    Args:
        field_name: Name of the field
        index: Optional index for list items
        sub_field: Optional sub-field name

    Returns:
        Stable key string
    """
    key = f"{WIDGET_PREFIX}{field_name}"
    if index is not None:
        key += f"_{index}"
    if sub_field:
        key += f"_{sub_field}"
    return key


def clear_widget_state() -> None:
    """
    Forget widget values so they re-read the page on the next run
    Olvidar valores de widgets para que se relean de la pagina
    """
    for key in [k for k in st.session_state.keys() if str(k).startswith(WIDGET_PREFIX)]:
        del st.session_state[key]


def pop_notifications() -> List[Tuple[str, str]]:
    messages = list(st.session_state.notifications)
    st.session_state.notifications = []
    return messages


def get_clipboard_text() -> Optional[str]:
    return st.session_state.get("clipboard_text")

