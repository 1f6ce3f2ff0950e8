"""
Form Renderer - Draft form rendering from YAML field definitions
YAMLの項目定義から下書きフォームを描画する
"""

import streamlit as st
from typing import Optional, Tuple

from motivation_drafts.config_loader import FormConfig
from motivation_drafts.draft_models import FormState, QuestionSection
from motivation_drafts.form_controller import FormController

from .components import render_char_count
from .state_store import get_stable_key


class FormRenderer:
    """
    Renders the draft form and echoes input back into FormState
    フォームを描画し入力内容をFormStateに反映する
    """

    def __init__(self, config: FormConfig, controller: FormController):
        self.config = config
        self.controller = controller
        self.fields = config.fields.get("fields", {})
        self.item_schema = config.get_item_schema("additionalQuestions")

    def render_form(self, state: FormState) -> Tuple[FormState, Optional[int]]:
        """
        Render the complete form and return updated state
        フォーム全体を描画し更新後の状態を返す

        Args:
            state: Current form state

        Returns:
            Tuple of (updated state, index of the question section whose
            remove button was clicked or None)
        """
        if state.is_editing:
            st.info(f"編集中の下書き: {state.company_name}")

        company_name = self._render_text_field("companyName", state.company_name)
        motivation_text = self._render_text_field("motivationText", state.motivation_text, show_count=True)
        result = self.controller.update_fields(state, company_name=company_name, motivation_text=motivation_text)

        remove_index = None
        if result.questions:
            list_label = self.fields.get("additionalQuestions", {}).get("label", "追加質問")
            st.markdown(f"**{list_label}**")

        for i, section in enumerate(result.questions):
            question, answer, remove_clicked = self._render_question_section(i, section)
            result = self.controller.update_question_section(result, i, question=question, answer=answer)
            if remove_clicked:
                remove_index = i

        return result, remove_index

    def _render_text_field(self, field_name: str, value: str, show_count: bool = False) -> str:
        """
        Render a single text field
        テキスト項目を1つ描画する
        """
        field_spec = self.fields.get(field_name, {})
        label = field_spec.get("label", field_name)
        if field_spec.get("required", False):
            label = f"{label} *"

        key = get_stable_key(field_name)
        placeholder = field_spec.get("placeholder", "")

        if field_spec.get("multiline"):
            new_value = st.text_area(label, value=value or "", key=key, placeholder=placeholder, height=200)
        else:
            new_value = st.text_input(label, value=value or "", key=key, placeholder=placeholder)

        if show_count:
            counter = self.controller.char_count(new_value)
            render_char_count(counter.label, counter.over_limit)

        return new_value

    def _render_question_section(self, index: int, section: QuestionSection) -> Tuple[str, str, bool]:
        """
        Render one question section with its own counter
        追加質問欄を1つ描画する

        Returns:
            Tuple of (question, answer, remove clicked)
        """
        question_spec = self.item_schema.get("question", {})
        answer_spec = self.item_schema.get("answer", {})

        with st.container(border=True):
            question = st.text_input(
                f"{question_spec.get('label', '質問')} {index + 1}",
                value=section.question,
                key=get_stable_key("additionalQuestions", index, "question"),
                placeholder=question_spec.get("placeholder", "")
            )
            answer = st.text_area(
                f"{answer_spec.get('label', '回答')} {index + 1}",
                value=section.answer,
                key=get_stable_key("additionalQuestions", index, "answer"),
                placeholder=answer_spec.get("placeholder", "")
            )
            counter = self.controller.char_count(answer)
            render_char_count(counter.label, counter.over_limit)

            remove_clicked = st.button(
                "この質問を削除",
                key=get_stable_key("remove_question", index)
            )

        return question, answer, remove_clicked
