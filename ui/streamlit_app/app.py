"""
Main Streamlit Application - Motivation letter drafts
志望動機メモのメインアプリケーション
"""

import streamlit as st
from datetime import datetime
from pathlib import Path
import logging
import sys

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from motivation_drafts.config_loader import FormConfig, load_config
from motivation_drafts.draft_store import DraftStore
from motivation_drafts.draft_transfer import export_records, import_records
from motivation_drafts.form_controller import ActionResult, FormController
from motivation_drafts.list_renderer import DraftListEntry, render_drafts
from motivation_drafts.slot_storage import SlotStorage

from ui.streamlit_app.components import (
    render_download_button,
    render_header,
    render_message,
    render_section_header,
)
from ui.streamlit_app.form_renderer import FormRenderer
from ui.streamlit_app.state_store import (
    get_form_state,
    get_pending_delete,
    init_session_state,
    pop_flash,
    set_flash,
    set_form_state,
    set_pending_delete,
)


def configure_logging(config: FormConfig) -> None:
    """Configure root logging from config.yaml / ログ設定"""
    settings = config.get_logging()
    logging.basicConfig(
        level=getattr(logging, str(settings.get("level", "INFO")).upper(), logging.INFO),
        format=settings.get("format", "%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    )


def build_controller(config: FormConfig) -> FormController:
    """Wire storage, store and controller from configuration"""
    storage = SlotStorage(config.get_storage_directory())
    store = DraftStore(storage, config.get_slot())
    return FormController(store, config)


def apply_result(result: ActionResult, reset_widgets: bool = True) -> None:
    """
    Store the next form state and queue the result message
    操作結果を状態とメッセージに反映する
    """
    set_form_state(result.state, reset_widgets=reset_widgets)
    if result.message:
        set_flash("success" if result.success else "warning", result.message)


def handle_select(controller: FormController, draft_id: int) -> None:
    """Start editing a draft from the list"""
    set_pending_delete(None)
    apply_result(controller.start_edit(get_form_state(), draft_id))


def handle_delete_request(draft_id: int) -> None:
    """Ask for confirmation before deleting"""
    set_pending_delete(draft_id)


def handle_delete_answer(controller: FormController, draft_id: int, answer: bool) -> None:
    """Apply the yes/no answer of the delete confirmation"""
    set_pending_delete(None)
    result = controller.delete_record(get_form_state(), draft_id, confirm=lambda prompt: answer)
    apply_result(result, reset_widgets=result.state.editing_id != get_form_state().editing_id)


def render_form_section(config: FormConfig, controller: FormController) -> None:
    """
    Render the entry form and its actions
    入力フォームと操作ボタンを描画する
    """
    state = get_form_state()
    render_section_header("下書きを編集" if state.is_editing else "新しい下書き", "📝")

    form_renderer = FormRenderer(config, controller)
    state, remove_index = form_renderer.render_form(state)
    set_form_state(state)

    if remove_index is not None:
        set_form_state(controller.remove_question_section(state, remove_index), reset_widgets=True)
        st.rerun()

    col_add, col_save, col_reset = st.columns(3)

    with col_add:
        if st.button("➕ 質問を追加", key="add_question_btn"):
            set_form_state(controller.add_question_section(state))
            st.rerun()

    with col_save:
        if st.button("💾 保存", key="save_btn", type="primary"):
            result = controller.submit(state)
            if result.success:
                apply_result(result)
                st.rerun()
            else:
                render_message("error", result.message)
                for err in result.errors:
                    st.warning(err.message)

    with col_reset:
        if st.button("🔄 リセット", key="reset_btn"):
            set_form_state(controller.start_create(state), reset_widgets=True)
            st.rerun()


def render_entry(controller: FormController, entry: DraftListEntry) -> None:
    """Render one saved draft with its edit/delete controls"""
    with st.container(border=True):
        st.markdown(entry.to_html(), unsafe_allow_html=True)

        if get_pending_delete() == entry.draft_id:
            st.warning(controller.message("confirm_delete"))
            col_yes, col_no = st.columns(2)
            with col_yes:
                st.button(
                    "はい",
                    key=f"confirm_delete_{entry.draft_id}",
                    type="primary",
                    on_click=handle_delete_answer,
                    args=(controller, entry.draft_id, True)
                )
            with col_no:
                st.button(
                    "いいえ",
                    key=f"cancel_delete_{entry.draft_id}",
                    on_click=handle_delete_answer,
                    args=(controller, entry.draft_id, False)
                )
            return

        col_edit, col_delete = st.columns(2)
        with col_edit:
            st.button(
                controller.message("edit_button"),
                key=f"edit_{entry.draft_id}",
                help=controller.message("edit_help"),
                on_click=entry.select
            )
        with col_delete:
            st.button("🗑️ 削除", key=f"delete_{entry.draft_id}", on_click=entry.delete)


def render_list_section(config: FormConfig, controller: FormController) -> None:
    """
    Render the saved draft list
    保存済み下書きの一覧を描画する
    """
    render_section_header("保存済みの志望動機", "📚")

    records = controller.list_records()
    if controller.store.last_warning:
        render_message("warning", config.get_message("malformed"))
        st.caption(controller.store.last_warning)

    view = render_drafts(
        records,
        on_select=lambda draft_id: handle_select(controller, draft_id),
        on_delete=handle_delete_request,
        placeholder=config.get_message("empty_list")
    )

    if view.is_empty:
        st.info(view.placeholder)
        return

    for entry in view.entries:
        render_entry(controller, entry)


def render_transfer_sidebar(controller: FormController) -> None:
    """
    Render export/import controls in the sidebar
    エクスポート・インポート
    """
    with st.sidebar:
        st.markdown("## 📁 データの書き出し・取り込み")
        st.markdown("---")

        records = controller.list_records()
        render_download_button(
            "📥 JSONでエクスポート",
            export_records(records),
            f"es_drafts_{datetime.now().strftime('%Y%m%d')}.json"
        )

        uploaded_json = st.file_uploader(
            "JSONファイルを取り込む (.json)",
            type=["json"],
            help="エクスポートしたJSONファイル",
            key="json_upload"
        )

        if uploaded_json is not None and st.button("取り込む", key="import_btn"):
            content = uploaded_json.read()
            result = import_records(records, content)
            if result.success:
                controller.store.save(result.records)
                set_flash("success", f"{result.imported}件を取り込みました（重複 {result.skipped}件はスキップ）")
                st.rerun()
            else:
                render_message("error", f"取り込みに失敗しました: {result.error}")


def main():
    """Main application entry point / メインエントリポイント"""
    config = load_config()
    configure_logging(config)
    ui = config.get_ui()

    # Page configuration
    st.set_page_config(
        page_title=ui.get("page_title", "志望動機メモ"),
        page_icon=ui.get("page_icon", "📝"),
        layout="wide"
    )

    init_session_state()
    controller = build_controller(config)

    render_header(ui.get("title", "志望動機メモ"), ui.get("subtitle"))

    flash = pop_flash()
    if flash:
        render_message(*flash)

    render_transfer_sidebar(controller)

    col_form, col_list = st.columns(2)
    with col_form:
        render_form_section(config, controller)
    with col_list:
        render_list_section(config, controller)


if __name__ == "__main__":
    main()
