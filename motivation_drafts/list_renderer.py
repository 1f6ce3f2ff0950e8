"""
List Renderer - Display entries for saved drafts
保存済み下書きの一覧表示

Pure projection of the collection; entries only forward select/delete
triggers to the callbacks they were rendered with.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, List, Optional, Sequence
import html

from .config_loader import DEFAULT_MESSAGES
from .draft_models import DraftRecord


DISPLAY_DATETIME_FORMAT = "%Y/%m/%d %H:%M:%S"


def format_timestamp(value: Optional[str]) -> Optional[str]:
    """
    Format an ISO-8601 timestamp for display
    日時を表示用に整形する

    Unparseable values are shown as stored.
    """
    if not value:
        return None
    try:
        return datetime.fromisoformat(value).strftime(DISPLAY_DATETIME_FORMAT)
    except ValueError:
        return value


def text_to_html(text: str) -> str:
    """Escape text and render newlines as line breaks"""
    escaped = html.escape(text or "")
    return escaped.replace("\r\n", "\n").replace("\n", "<br>")


@dataclass
class QuestionBlock:
    """Rendered question/answer pair / 追加質問の表示ブロック"""
    position: int
    label: str
    question_html: str
    answer_html: str


@dataclass
class DraftListEntry:
    """One displayed draft with its triggers / 一覧の1件"""
    draft_id: int
    company_name: str
    saved_at_label: Optional[str]
    updated_at_label: Optional[str]
    body_html: str
    questions: List[QuestionBlock] = field(default_factory=list)
    on_select: Optional[Callable[[int], object]] = None
    on_delete: Optional[Callable[[int], object]] = None

    def select(self):
        """Trigger edit of this draft"""
        if self.on_select is not None:
            return self.on_select(self.draft_id)
        return None

    def delete(self):
        """Trigger deletion of this draft; never triggers select"""
        if self.on_delete is not None:
            return self.on_delete(self.draft_id)
        return None

    def to_html(self) -> str:
        """Card markup for the presentation surface"""
        parts = [f"<h3>{html.escape(self.company_name)}</h3>"]
        parts.append(f"<p><strong>保存日時:</strong> {html.escape(self.saved_at_label or '')}</p>")
        if self.updated_at_label:
            parts.append(f"<p><strong>更新日時:</strong> {html.escape(self.updated_at_label)}</p>")
        parts.append(f"<p>{self.body_html}</p>")
        for block in self.questions:
            parts.append(
                f'<div class="question-block"><p><strong>{html.escape(block.label)}:</strong> '
                f"{block.question_html}</p><p>{block.answer_html}</p></div>"
            )
        return "\n".join(parts)


@dataclass
class DraftListView:
    """Rendered draft list / 一覧全体"""
    entries: List[DraftListEntry]
    placeholder: str

    @property
    def is_empty(self) -> bool:
        return not self.entries


def render_drafts(
    records: Sequence[DraftRecord],
    on_select: Optional[Callable[[int], object]] = None,
    on_delete: Optional[Callable[[int], object]] = None,
    placeholder: str = DEFAULT_MESSAGES["empty_list"]
) -> DraftListView:
    """
    Project the collection into display entries
    コレクションを表示用に変換する

    Args:
        records: Collection in stored order
        on_select: Called with the draft id when an entry is selected
        on_delete: Called with the draft id when delete is triggered
        placeholder: Text shown when the collection is empty

    Returns:
        DraftListView with one entry per record, in collection order
    """
    entries = []
    for record in records:
        questions = [
            QuestionBlock(
                position=i,
                label=f"質問{i}",
                question_html=text_to_html(qa.question),
                answer_html=text_to_html(qa.answer),
            )
            for i, qa in enumerate(record.additional_questions, start=1)
        ]
        entries.append(DraftListEntry(
            draft_id=record.id,
            company_name=record.company_name,
            saved_at_label=format_timestamp(record.saved_at),
            updated_at_label=format_timestamp(record.updated_at),
            body_html=text_to_html(record.motivation_text),
            questions=questions,
            on_select=on_select,
            on_delete=on_delete,
        ))

    return DraftListView(entries=entries, placeholder=placeholder)
