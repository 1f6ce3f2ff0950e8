"""
Form Controller - Editing session and draft CRUD
編集セッションと下書きの作成・更新・削除

Every operation takes the current FormState and returns an ActionResult
carrying the next state. Input states are never mutated.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional
import logging

from .config_loader import FormConfig, DEFAULT_CHAR_LIMIT, format_message
from .draft_models import DraftRecord, FormState, QuestionSection
from .draft_store import DraftStore
from .draft_validator import CharCount, DraftValidator, ValidationError, char_count
from .exceptions import DraftNotFoundError

logger = logging.getLogger(__name__)


@dataclass
class ActionResult:
    """Result of a form action / フォーム操作の結果"""
    state: FormState
    success: bool = True
    error: Optional[str] = None
    message: str = ""
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[ValidationError] = field(default_factory=list)
    record: Optional[DraftRecord] = None


def _index_of(records: List[DraftRecord], draft_id: int) -> int:
    for i, record in enumerate(records):
        if record.id == draft_id:
            return i
    raise DraftNotFoundError(draft_id)


def to_form_data(state: FormState) -> Dict[str, Any]:
    """Form state as a dictionary in persisted key layout"""
    return {
        "companyName": state.company_name,
        "motivationText": state.motivation_text,
        "additionalQuestions": [
            {"question": q.question, "answer": q.answer} for q in state.questions
        ],
    }


class FormController:
    """
    Translates form actions into store reads and writes
    フォーム操作をストアの読み書きに変換する
    """

    def __init__(
        self,
        store: DraftStore,
        config: Optional[FormConfig] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        self.store = store
        self.config = config
        self.validator = DraftValidator(config)
        self.char_limit = config.get_char_limit() if config is not None else DEFAULT_CHAR_LIMIT
        self._clock = clock or datetime.now

    def message(self, key: str, **kwargs: Any) -> str:
        messages = self.config.config.get("messages", {}) if self.config is not None else {}
        return format_message(messages, key, **kwargs)

    def _new_id(self, records: List[DraftRecord], now: datetime) -> int:
        candidate = int(now.timestamp() * 1000)
        if records:
            candidate = max(candidate, max(r.id for r in records) + 1)
        return candidate

    def _not_found(self, state: FormState, draft_id: int) -> ActionResult:
        logger.warning("Draft %s not found", draft_id)
        return ActionResult(
            state=state,
            success=False,
            error="not_found",
            message=self.message("not_found")
        )

    # ==================== Read ====================

    def list_records(self) -> List[DraftRecord]:
        """Current collection, most recent first"""
        return self.store.load()

    def char_count(self, text: Optional[str]) -> CharCount:
        """Advisory character count for a live text field"""
        return char_count(text, self.char_limit, self.config)

    # ==================== Session ====================

    def start_create(self, state: Optional[FormState] = None) -> FormState:
        """
        Clear the form into new-entry mode
        新規作成モードにリセットする
        """
        return FormState()

    def start_edit(self, state: FormState, draft_id: int) -> ActionResult:
        """
        Load a saved draft into the form
        保存済みの下書きをフォームに読み込む

        Args:
            state: Current form state
            draft_id: ID of the draft to edit

        Returns:
            ActionResult with the editing state, or not_found with the state
            unchanged (create mode if the edited draft itself is gone)
        """
        records = self.store.load()
        try:
            record = records[_index_of(records, draft_id)]
        except DraftNotFoundError as e:
            fallback = state.copy()
            if state.editing_id is not None and not any(r.id == state.editing_id for r in records):
                fallback = FormState()
            return self._not_found(fallback, e.draft_id)

        new_state = FormState(
            editing_id=record.id,
            company_name=record.company_name,
            motivation_text=record.motivation_text,
            questions=[QuestionSection(q.question, q.answer) for q in record.additional_questions],
        )
        logger.info("Editing draft %s", record.id)
        return ActionResult(state=new_state, record=record)

    # ==================== Live Fields ====================

    def update_fields(
        self,
        state: FormState,
        company_name: Optional[str] = None,
        motivation_text: Optional[str] = None
    ) -> FormState:
        """Echo live input of the main fields"""
        new_state = state.copy()
        if company_name is not None:
            new_state.company_name = company_name
        if motivation_text is not None:
            new_state.motivation_text = motivation_text
        return new_state

    def add_question_section(self, state: FormState) -> FormState:
        """Append an empty question section / 追加質問欄を追加する"""
        new_state = state.copy()
        new_state.questions.append(QuestionSection())
        return new_state

    def update_question_section(
        self,
        state: FormState,
        index: int,
        question: Optional[str] = None,
        answer: Optional[str] = None
    ) -> FormState:
        """Echo live input of one question section"""
        new_state = state.copy()
        if not 0 <= index < len(new_state.questions):
            logger.warning("Question section %d out of range (%d sections)", index, len(new_state.questions))
            return new_state
        section = new_state.questions[index]
        if question is not None:
            section.question = question
        if answer is not None:
            section.answer = answer
        return new_state

    def remove_question_section(self, state: FormState, index: int) -> FormState:
        """Remove the question section at index / 追加質問欄を削除する"""
        new_state = state.copy()
        if not 0 <= index < len(new_state.questions):
            logger.warning("Question section %d out of range (%d sections)", index, len(new_state.questions))
            return new_state
        del new_state.questions[index]
        return new_state

    # ==================== Write ====================

    def submit(self, state: FormState) -> ActionResult:
        """
        Validate and save the form as a new or updated draft
        フォームを検証して下書きを保存する

        Args:
            state: Current form state

        Returns:
            ActionResult; on success the state is reset to create mode
        """
        validation = self.validator.validate(to_form_data(state))
        if not validation.is_valid:
            logger.info("Draft not saved: %s", ", ".join(err.field for err in validation.errors))
            return ActionResult(
                state=state.copy(),
                success=False,
                error="validation",
                message=self.message("required"),
                errors=validation.errors,
                warnings=validation.warnings
            )

        company_name = state.company_name.strip()
        motivation_text = state.motivation_text.strip()
        questions = [q.to_pair() for q in state.questions]
        records = self.store.load()
        now = self._clock()

        if state.editing_id is not None:
            try:
                index = _index_of(records, state.editing_id)
            except DraftNotFoundError as e:
                return self._not_found(FormState(), e.draft_id)

            original = records[index]
            record = DraftRecord(
                id=original.id,
                company_name=company_name,
                motivation_text=motivation_text,
                additional_questions=questions,
                saved_at=original.saved_at,
                updated_at=now.isoformat(timespec="seconds"),
            )
            records[index] = record
            message = self.message("updated", company_name=company_name)
            logger.info("Updated draft %s", record.id)
        else:
            record = DraftRecord(
                id=self._new_id(records, now),
                company_name=company_name,
                motivation_text=motivation_text,
                additional_questions=questions,
                saved_at=now.isoformat(timespec="seconds"),
            )
            records.insert(0, record)
            message = self.message("saved", company_name=company_name)
            logger.info("Created draft %s", record.id)

        self.store.save(records)
        return ActionResult(
            state=self.start_create(state),
            message=message,
            warnings=validation.warnings,
            record=record
        )

    def delete_record(self, state: FormState, draft_id: int, confirm: Callable[[str], bool]) -> ActionResult:
        """
        Delete a draft after confirmation
        確認のうえ下書きを削除する

        Args:
            state: Current form state
            draft_id: ID of the draft to delete
            confirm: Yes/no gate called with the confirmation prompt

        Returns:
            ActionResult; the form falls back to create mode when the
            deleted draft was being edited
        """
        if not confirm(self.message("confirm_delete")):
            return ActionResult(
                state=state.copy(),
                success=False,
                error="cancelled",
                message=self.message("delete_cancelled")
            )

        next_state = FormState() if state.editing_id == draft_id else state.copy()
        records = self.store.load()
        try:
            removed = records.pop(_index_of(records, draft_id))
        except DraftNotFoundError as e:
            if next_state.editing_id is not None and not any(r.id == next_state.editing_id for r in records):
                next_state = FormState()
            return self._not_found(next_state, e.draft_id)

        self.store.save(records)
        logger.info("Deleted draft %s", draft_id)
        return ActionResult(state=next_state, message=self.message("deleted"), record=removed)
