"""
Draft Models - Persisted records and transient form state
永続化される下書きレコードと編集中フォームの状態
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ==================== Persisted Models ====================

class QuestionAnswer(BaseModel):
    """One supplementary question/answer pair / 追加質問と回答"""
    model_config = ConfigDict(extra="ignore")

    question: str = Field("", description="Question text")
    answer: str = Field("", description="Answer text")


class DraftRecord(BaseModel):
    """
    One saved motivation letter
    保存済みの志望動機1件

    Serialized with camelCase keys, the layout of the persisted slot.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int = Field(..., description="Unique id derived from the creation time in ms")
    company_name: str = Field(..., alias="companyName", description="Company name")
    motivation_text: str = Field(..., alias="motivationText", description="Main motivation text")
    additional_questions: List[QuestionAnswer] = Field(
        default_factory=list,
        alias="additionalQuestions",
        description="Supplementary question/answer pairs in display order"
    )
    saved_at: str = Field(..., alias="savedAt", description="Creation timestamp (ISO-8601)")
    updated_at: Optional[str] = Field(None, alias="updatedAt", description="Last edit timestamp (ISO-8601)")

    @field_validator("company_name", "motivation_text")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    def to_storage_dict(self) -> Dict[str, Any]:
        """Dictionary in persisted layout; updatedAt is omitted until the first edit"""
        return self.model_dump(by_alias=True, exclude_none=True)


# ==================== Transient Form State ====================

@dataclass
class QuestionSection:
    """Live question section in the form / フォーム上の追加質問欄"""
    question: str = ""
    answer: str = ""

    def to_pair(self) -> QuestionAnswer:
        return QuestionAnswer(question=self.question, answer=self.answer)


@dataclass
class FormState:
    """
    Transient editing state owned by the form controller
    フォームの編集状態（永続化しない）

    editing_id is None in new-entry mode, otherwise the id of the draft
    being edited.
    """
    editing_id: Optional[int] = None
    company_name: str = ""
    motivation_text: str = ""
    questions: List[QuestionSection] = field(default_factory=list)

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

    def copy(self) -> "FormState":
        return FormState(
            editing_id=self.editing_id,
            company_name=self.company_name,
            motivation_text=self.motivation_text,
            questions=[QuestionSection(q.question, q.answer) for q in self.questions],
        )
