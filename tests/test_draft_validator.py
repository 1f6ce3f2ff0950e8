"""
Tests for draft validation
下書き検証のテスト
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from motivation_drafts.config_loader import FormConfig, load_config
from motivation_drafts.draft_validator import char_count, validate_draft


def form_data(company="Acme", text="Hello", questions=None):
    return {
        "companyName": company,
        "motivationText": text,
        "additionalQuestions": questions or [],
    }


class TestValidateDraft:
    """Tests for validate_draft"""

    def test_valid(self):
        result = validate_draft(form_data())
        assert result.is_valid
        assert result.errors == []
        assert result.warnings == []

    def test_required_fields(self):
        result = validate_draft(form_data(company="", text=" "))
        assert not result.is_valid
        assert [(e.field, e.code) for e in result.errors] == [
            ("companyName", "required"),
            ("motivationText", "required"),
        ]

    def test_missing_key(self):
        result = validate_draft({"companyName": "Acme"})
        assert [e.field for e in result.errors] == ["motivationText"]

    def test_empty_question_sections_are_allowed(self):
        result = validate_draft(form_data(questions=[{"question": "", "answer": ""}]))
        assert result.is_valid

    def test_length_is_a_warning(self):
        result = validate_draft(form_data(text="x" * 500))
        assert result.is_valid
        assert result.warnings[0].field == "motivationText"
        assert result.warnings[0].value == 500


class TestValidateWithConfig:
    """Validation driven by fields.yaml"""

    def test_labels_from_config(self):
        result = validate_draft(form_data(company=""), load_config())
        assert "企業名" in result.errors[0].message

    def test_long_answer_warning(self):
        questions = [{"question": "Q1", "answer": "a" * 401}]
        result = validate_draft(form_data(questions=questions), load_config())
        assert result.is_valid
        assert [w.field for w in result.warnings] == ["additionalQuestions[0].answer"]


class TestRequiredFieldsAlwaysEnforced:
    """Main fields stay required even when fields.yaml says otherwise"""

    @pytest.fixture
    def partial_config(self, tmp_path):
        (tmp_path / "fields.yaml").write_text(
            "fields:\n"
            "  companyName:\n"
            "    label: 会社\n"
            "    required: false\n",
            encoding="utf-8"
        )
        return FormConfig("partial", base_path=tmp_path)

    def test_missing_motivation_text_definition(self, partial_config):
        result = validate_draft(form_data(text=""), partial_config)
        assert not result.is_valid
        assert [e.field for e in result.errors] == ["motivationText"]

    def test_required_false_is_ignored(self, partial_config):
        result = validate_draft(form_data(company="  "), partial_config)
        assert [e.field for e in result.errors] == ["companyName"]
        assert "会社" in result.errors[0].message


class TestCharCount:
    """Tests for char_count"""

    def test_counts_code_points(self):
        assert char_count("志望動機").length == 4

    def test_none_is_zero(self):
        assert char_count(None).length == 0

    def test_custom_limit(self):
        counter = char_count("abcdef", limit=5)
        assert counter.over_limit
        assert counter.label == "文字数：6 (⚠️ 5字を超えています)"

    def test_config_labels(self):
        counter = char_count("abc", config=load_config())
        assert counter.label == "文字数：3"


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
