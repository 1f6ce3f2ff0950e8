"""
Draft Validator - Submit-time validation and advisory character counts
保存時の入力チェックと文字数カウント
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .config_loader import FormConfig, DEFAULT_CHAR_LIMIT, format_message


# Used when no field definitions are configured
DEFAULT_FIELDS = {
    "companyName": {"label": "企業名", "required": True},
    "motivationText": {"label": "志望動機", "required": True, "validation": {"max_length": DEFAULT_CHAR_LIMIT}},
}


@dataclass
class ValidationError:
    """Single validation error / 個別の検証エラー"""
    field: str
    message: str
    code: str
    value: Any = None


@dataclass
class ValidationResult:
    """Result of validation / 検証結果"""
    is_valid: bool
    errors: List[ValidationError] = field(default_factory=list)
    warnings: List[ValidationError] = field(default_factory=list)

    def add_error(self, field_name: str, message: str, code: str, value: Any = None):
        self.errors.append(ValidationError(field=field_name, message=message, code=code, value=value))
        self.is_valid = False

    def add_warning(self, field_name: str, message: str, code: str, value: Any = None):
        self.warnings.append(ValidationError(field=field_name, message=message, code=code, value=value))


@dataclass
class CharCount:
    """Live character count of one text field / 文字数表示"""
    length: int
    limit: int
    over_limit: bool
    label: str


def char_count(text: Optional[str], limit: int = DEFAULT_CHAR_LIMIT, config: Optional[FormConfig] = None) -> CharCount:
    """
    Count characters for the live counter
    文字数をカウントする

    Over the limit is only flagged, never rejected.

    Args:
        text: Current field text
        limit: Advisory limit
        config: Optional config providing the label templates

    Returns:
        CharCount with the display label
    """
    length = len(text or "")
    over_limit = length > limit

    messages = config.config.get("messages", {}) if config is not None else {}
    label = format_message(messages, "char_count", length=length)
    if over_limit:
        label += format_message(messages, "over_limit", limit=limit)

    return CharCount(length=length, limit=limit, over_limit=over_limit, label=label)


class DraftValidator:
    """
    Validator for draft form data
    下書きフォームの検証
    """

    def __init__(self, config: Optional[FormConfig] = None):
        self.config = config
        fields = config.fields.get("fields", {}) if config is not None else {}
        self.fields = dict(fields or DEFAULT_FIELDS)
        # The two main fields are required whatever the configuration says
        for name, default_spec in DEFAULT_FIELDS.items():
            self.fields[name] = {**default_spec, **(self.fields.get(name) or {}), "required": True}
        self.item_schema = self.fields.get("additionalQuestions", {}).get("item_schema", {})

    def validate(self, data: Dict[str, Any]) -> ValidationResult:
        """
        Validate form data before it is written
        保存前にフォームデータを検証する

        Args:
            data: Dictionary with companyName, motivationText and
                additionalQuestions (list of question/answer dicts)

        Returns:
            ValidationResult; length limits only produce warnings
        """
        result = ValidationResult(is_valid=True)

        for field_name, field_spec in self.fields.items():
            if field_spec.get("type") == "list":
                continue

            value = data.get(field_name)
            label = field_spec.get("label", field_name)

            if field_spec.get("required", False):
                if value is None or (isinstance(value, str) and value.strip() == ""):
                    result.add_error(
                        field_name,
                        f"「{label}」は必須です",
                        "required"
                    )
                    continue

            self._check_length(field_name, label, field_spec, value, result)

        # No required check per question section
        for i, item in enumerate(data.get("additionalQuestions") or []):
            for sub_field, sub_spec in self.item_schema.items():
                self._check_length(
                    f"additionalQuestions[{i}].{sub_field}",
                    f"{sub_spec.get('label', sub_field)}{i + 1}",
                    sub_spec,
                    item.get(sub_field),
                    result
                )

        return result

    def _check_length(self, field_name: str, label: str, field_spec: dict, value: Any, result: ValidationResult):
        """Advisory max length / 文字数上限（警告のみ）"""
        max_length = field_spec.get("validation", {}).get("max_length")
        if max_length and isinstance(value, str) and len(value) > max_length:
            result.add_warning(
                field_name,
                f"「{label}」が{max_length}字を超えています（{len(value)}字）",
                "max_length",
                len(value)
            )


def validate_draft(data: Dict[str, Any], config: Optional[FormConfig] = None) -> ValidationResult:
    """
    Convenience function to validate draft form data
    下書きフォームを検証する簡易関数
    """
    validator = DraftValidator(config)
    return validator.validate(data)
