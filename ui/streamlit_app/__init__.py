# Streamlit App UI Components
from .state_store import (
    init_session_state,
    create_page,
    get_page,
    reset_page,
    get_stable_key,
    clear_widget_state,
    pop_notifications,
    get_clipboard_text,
    SessionClipboard,
    SessionNotifier,
)
from .form_renderer import FormRenderer
from .components import (
    render_header,
    render_success_message,
    render_error_message,
    render_notifications,
    render_report,
)

__all__ = [
    'init_session_state',
    'create_page',
    'get_page',
    'reset_page',
    'get_stable_key',
    'clear_widget_state',
    'pop_notifications',
    'get_clipboard_text',
    'SessionClipboard',
    'SessionNotifier',
    'FormRenderer',
    'render_header',
    'render_success_message',
    'render_error_message',
    'render_notifications',
    'render_report',
]
