# Streamlit App UI Components
from .state_store import (
    init_session_state,
    get_stable_key,
    get_form_state,
    set_form_state,
    get_pending_delete,
    set_pending_delete,
    set_flash,
    pop_flash,
)
from .form_renderer import FormRenderer
from .components import (
    render_header,
    render_section_header,
    render_message,
    render_char_count,
    render_download_button,
)

__all__ = [
    'init_session_state',
    'get_stable_key',
    'get_form_state',
    'set_form_state',
    'get_pending_delete',
    'set_pending_delete',
    'set_flash',
    'pop_flash',
    'FormRenderer',
    'render_header',
    'render_section_header',
    'render_message',
    'render_char_count',
    'render_download_button',
]
