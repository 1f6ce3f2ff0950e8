"""
State Store - Session state management for Streamlit
Streamlitのセッション状態管理

The session owns the single FormState instance. Widget keys carry a
form version so that resetting or loading a draft re-creates the widgets
from the new state.
"""

import streamlit as st
from typing import Optional, Tuple

from motivation_drafts.draft_models import FormState


def init_session_state() -> None:
    """
    Initialize session state
    セッション状態を初期化する
    """
    if "form_state" not in st.session_state:
        st.session_state.form_state = FormState()

    if "form_version" not in st.session_state:
        st.session_state.form_version = 0

    if "pending_delete_id" not in st.session_state:
        st.session_state.pending_delete_id = None

    if "flash" not in st.session_state:
        st.session_state.flash = None


def get_stable_key(field_name: str, index: Optional[int] = None, sub_field: Optional[str] = None) -> str:
    """
    Generate widget key for the current form version
    ウィジェットのキーを生成する

    Args:
        field_name: Name of the field
        index: Optional index for question sections
        sub_field: Optional sub-field name

    Returns:
        Key string
    """
    key = f"field_{st.session_state.form_version}_{field_name}"
    if index is not None:
        key += f"_{index}"
    if sub_field:
        key += f"_{sub_field}"
    return key


def get_form_state() -> FormState:
    """Get the current form state"""
    return st.session_state.form_state


def set_form_state(state: FormState, reset_widgets: bool = False) -> None:
    """
    Replace the form state
    フォーム状態を置き換える

    Args:
        state: New form state
        reset_widgets: Re-create input widgets from the new state
    """
    st.session_state.form_state = state
    if reset_widgets:
        st.session_state.form_version += 1


def get_pending_delete() -> Optional[int]:
    """ID of the draft awaiting delete confirmation"""
    return st.session_state.pending_delete_id


def set_pending_delete(draft_id: Optional[int]) -> None:
    st.session_state.pending_delete_id = draft_id


def set_flash(kind: str, message: str) -> None:
    """Keep a message to show after the next rerun"""
    st.session_state.flash = (kind, message)


def pop_flash() -> Optional[Tuple[str, str]]:
    """Take the pending message, if any"""
    flash = st.session_state.flash
    st.session_state.flash = None
    return flash
