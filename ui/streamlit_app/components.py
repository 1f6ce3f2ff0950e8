"""
Components - Reusable UI components
再利用可能なUI部品
"""

import streamlit as st
from typing import Optional


def render_header(title: str, subtitle: Optional[str] = None) -> None:
    """
    Render page header
    ページ見出しを表示する

    Args:
        title: Main title
        subtitle: Optional subtitle
    """
    st.title(f"{title}")
    if subtitle:
        st.markdown(f"**{subtitle}**")
    st.markdown("---")


def render_section_header(title: str, icon: Optional[str] = None) -> None:
    """
    Render section header
    セクション見出しを表示する
    """
    if icon:
        st.markdown(f"### {icon} {title}")
    else:
        st.markdown(f"### {title}")


def render_message(kind: str, message: str) -> None:
    """
    Render a status message by kind
    種類に応じてメッセージを表示する

    Args:
        kind: One of success, error, warning, info
        message: Message text
    """
    if kind == "success":
        st.success(message)
    elif kind == "error":
        st.error(message)
    elif kind == "warning":
        st.warning(message)
    else:
        st.info(message)


def render_char_count(label: str, over_limit: bool) -> None:
    """
    Render a live character counter
    文字数カウンターを表示する
    """
    if over_limit:
        st.markdown(f":red[{label}]")
    else:
        st.caption(label)


def render_download_button(label: str, data: str, file_name: str, mime_type: str = "application/json") -> bool:
    """
    Render download button
    ダウンロードボタンを表示する

    Returns:
        True if button was clicked
    """
    return st.download_button(
        label=label,
        data=data,
        file_name=file_name,
        mime=mime_type
    )
