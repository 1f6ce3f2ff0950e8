"""
Tests for the form controller
フォームコントローラのテスト
"""

import pytest
import sys
from datetime import datetime, timedelta
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from motivation_drafts.config_loader import FormConfig
from motivation_drafts.draft_models import FormState, QuestionSection
from motivation_drafts.draft_store import DraftStore
from motivation_drafts.form_controller import FormController
from motivation_drafts.slot_storage import SlotStorage


class FakeClock:
    """Deterministic clock advancing one second per call"""

    def __init__(self, start=datetime(2026, 10, 19, 9, 0, 0)):
        self.current = start

    def __call__(self):
        value = self.current
        self.current += timedelta(seconds=1)
        return value


def always_yes(prompt):
    return True


def always_no(prompt):
    return False


@pytest.fixture
def store(tmp_path):
    return DraftStore(SlotStorage(tmp_path), "esDrafts")


@pytest.fixture
def controller(store):
    return FormController(store, clock=FakeClock())


def filled(controller, company="Acme", text="Hello"):
    state = controller.start_create()
    return controller.update_fields(state, company_name=company, motivation_text=text)


def create(controller, company="Acme", text="Hello"):
    result = controller.submit(filled(controller, company, text))
    assert result.success
    return result.record


class TestStartCreate:
    """Tests for start_create"""

    def test_clears_state(self, controller):
        state = FormState(
            editing_id=1,
            company_name="Acme",
            motivation_text="Hello",
            questions=[QuestionSection("Q1", "A1")]
        )
        cleared = controller.start_create(state)
        assert cleared == FormState()
        assert cleared.is_editing is False

    def test_idempotent(self, controller):
        once = controller.start_create(filled(controller))
        twice = controller.start_create(once)
        assert once == twice


class TestSubmit:
    """Tests for submit"""

    def test_create_first_draft(self, controller, store):
        result = controller.submit(filled(controller, "Acme", "Hello"))

        assert result.success
        records = store.load()
        assert len(records) == 1
        record = records[0]
        assert record.company_name == "Acme"
        assert record.motivation_text == "Hello"
        assert record.additional_questions == []
        assert record.saved_at == "2026-10-19T09:00:00"
        assert record.updated_at is None
        assert "Acme" in result.message

    def test_resets_to_create_mode(self, controller):
        result = controller.submit(filled(controller))
        assert result.state == FormState()

    def test_empty_company_name_is_rejected(self, controller, store):
        create(controller, "Existing", "Text")
        before = store.storage.get_item("esDrafts")

        result = controller.submit(filled(controller, "", "Some text"))

        assert result.success is False
        assert result.error == "validation"
        assert [e.field for e in result.errors] == ["companyName"]
        assert store.storage.get_item("esDrafts") == before

    def test_whitespace_only_is_rejected(self, controller, store):
        result = controller.submit(filled(controller, "   ", "\n\t"))

        assert result.error == "validation"
        assert {e.field for e in result.errors} == {"companyName", "motivationText"}
        assert store.load() == []

    def test_empty_text_rejected_without_field_definition(self, store, tmp_path):
        config_dir = tmp_path / "partial_config"
        config_dir.mkdir()
        (config_dir / "fields.yaml").write_text(
            "fields:\n  companyName:\n    label: 企業名\n    required: true\n",
            encoding="utf-8"
        )
        controller = FormController(store, FormConfig("partial", base_path=config_dir), clock=FakeClock())

        result = controller.submit(filled(controller, "Acme", ""))

        assert result.success is False
        assert result.error == "validation"
        assert [e.field for e in result.errors] == ["motivationText"]
        assert store.load() == []

    def test_rejected_submit_keeps_live_values(self, controller):
        state = filled(controller, "", "Draft text")
        result = controller.submit(state)
        assert result.state.motivation_text == "Draft text"

    def test_values_are_trimmed(self, controller, store):
        controller.submit(filled(controller, "  Acme  ", "\nHello\n"))
        record = store.load()[0]
        assert record.company_name == "Acme"
        assert record.motivation_text == "Hello"

    def test_question_sections_in_order(self, controller, store):
        state = filled(controller)
        state = controller.add_question_section(state)
        state = controller.add_question_section(state)
        state = controller.update_question_section(state, 0, question="Q1", answer="A1")
        state = controller.update_question_section(state, 1, question="Q2", answer="A2")

        controller.submit(state)

        stored = store.load()[0].to_storage_dict()["additionalQuestions"]
        assert stored == [
            {"question": "Q1", "answer": "A1"},
            {"question": "Q2", "answer": "A2"},
        ]

    def test_empty_question_section_is_kept(self, controller, store):
        state = controller.add_question_section(filled(controller))
        result = controller.submit(state)

        assert result.success
        assert len(store.load()[0].additional_questions) == 1

    def test_new_drafts_go_first(self, controller, store):
        create(controller, "First", "1")
        create(controller, "Second", "2")
        assert [r.company_name for r in store.load()] == ["Second", "First"]

    def test_over_limit_is_only_a_warning(self, controller, store):
        result = controller.submit(filled(controller, "Acme", "あ" * 401))

        assert result.success
        assert [w.code for w in result.warnings] == ["max_length"]
        assert len(store.load()) == 1


class TestUniqueIds:
    """Ids stay pairwise unique"""

    def test_same_clock_value(self, store):
        frozen = datetime(2026, 10, 19, 9, 0, 0)
        controller = FormController(store, clock=lambda: frozen)

        for i in range(5):
            create(controller, f"Company {i}", "Text")

        ids = [r.id for r in store.load()]
        assert len(set(ids)) == 5

    def test_mixed_operations(self, controller, store):
        first = create(controller, "A", "a")
        create(controller, "B", "b")
        controller.delete_record(FormState(), first.id, always_yes)
        create(controller, "C", "c")
        edit = controller.start_edit(FormState(), store.load()[0].id)
        controller.submit(controller.update_fields(edit.state, motivation_text="changed"))
        create(controller, "D", "d")

        ids = [r.id for r in store.load()]
        assert len(ids) == 3
        assert len(set(ids)) == len(ids)


class TestEdit:
    """Tests for start_edit and submit in edit mode"""

    def test_loads_record_into_state(self, controller):
        state = controller.add_question_section(filled(controller))
        state = controller.update_question_section(state, 0, question="Q1", answer="A1")
        record = controller.submit(state).record

        result = controller.start_edit(FormState(), record.id)

        assert result.success
        assert result.state.editing_id == record.id
        assert result.state.company_name == "Acme"
        assert result.state.motivation_text == "Hello"
        assert result.state.questions == [QuestionSection("Q1", "A1")]

    def test_edit_preserves_identity(self, controller, store):
        create(controller, "Other", "x")
        record = create(controller, "Acme", "Hello")
        create(controller, "Newest", "y")

        state = controller.start_edit(FormState(), record.id).state
        result = controller.submit(controller.update_fields(state, motivation_text="Changed"))

        records = store.load()
        assert len(records) == 3
        edited = records[1]
        assert edited.id == record.id
        assert edited.saved_at == record.saved_at
        assert edited.motivation_text == "Changed"
        assert edited.updated_at is not None
        assert edited.updated_at != record.saved_at
        assert result.state == FormState()

    def test_edit_replaces_questions(self, controller, store):
        state = controller.add_question_section(filled(controller))
        record = controller.submit(state).record

        state = controller.start_edit(FormState(), record.id).state
        state = controller.remove_question_section(state, 0)
        controller.submit(state)

        assert store.load()[0].additional_questions == []

    def test_missing_id_is_noop(self, controller, store):
        create(controller)
        state = filled(controller, "Typing", "in progress")

        result = controller.start_edit(state, 12345)

        assert result.success is False
        assert result.error == "not_found"
        assert result.state == state

    def test_missing_id_while_editing_vanished_record(self, controller, store):
        record = create(controller)
        state = controller.start_edit(FormState(), record.id).state
        store.save([])

        result = controller.start_edit(state, 999)

        assert result.error == "not_found"
        assert result.state == FormState()

    def test_submit_after_record_vanished(self, controller, store):
        record = create(controller)
        state = controller.start_edit(FormState(), record.id).state
        store.save([])

        result = controller.submit(state)

        assert result.error == "not_found"
        assert result.state.editing_id is None
        assert store.load() == []


class TestQuestionSections:
    """Tests for live question sections"""

    def test_add_appends_empty_section(self, controller):
        state = controller.add_question_section(FormState(questions=[QuestionSection("Q1", "A1")]))
        assert state.questions == [QuestionSection("Q1", "A1"), QuestionSection("", "")]

    def test_remove_keeps_order(self, controller):
        state = FormState(questions=[
            QuestionSection("Q1", "A1"),
            QuestionSection("Q2", "A2"),
            QuestionSection("Q3", "A3"),
        ])
        state = controller.remove_question_section(state, 1)
        assert [q.question for q in state.questions] == ["Q1", "Q3"]

    def test_remove_out_of_range(self, controller):
        state = FormState(questions=[QuestionSection("Q1", "A1")])
        assert controller.remove_question_section(state, 5) == state

    def test_operations_do_not_mutate_input(self, controller):
        state = FormState(questions=[QuestionSection("Q1", "A1")])
        controller.add_question_section(state)
        controller.update_question_section(state, 0, answer="changed")
        controller.remove_question_section(state, 0)
        assert state.questions == [QuestionSection("Q1", "A1")]


class TestDelete:
    """Tests for delete_record"""

    def test_confirmed_delete(self, controller, store):
        keep = create(controller, "Keep", "k")
        remove = create(controller, "Remove", "r")

        result = controller.delete_record(FormState(), remove.id, always_yes)

        assert result.success
        assert [r.id for r in store.load()] == [keep.id]

    def test_declined_delete(self, controller, store):
        record = create(controller)
        before = store.storage.get_item("esDrafts")

        result = controller.delete_record(FormState(), record.id, always_no)

        assert result.success is False
        assert result.error == "cancelled"
        assert store.storage.get_item("esDrafts") == before

    def test_confirmation_prompt(self, controller):
        record = create(controller)
        prompts = []
        controller.delete_record(FormState(), record.id, lambda p: prompts.append(p) or False)
        assert prompts == ["本当にこの下書きを削除しますか？"]

    def test_delete_record_being_edited(self, controller, store):
        record = create(controller)
        state = controller.start_edit(FormState(), record.id).state

        result = controller.delete_record(state, record.id, always_yes)

        assert result.success
        assert result.state.editing_id is None
        assert result.state == FormState()

    def test_delete_other_record_keeps_edit(self, controller):
        editing = create(controller, "Editing", "e")
        other = create(controller, "Other", "o")
        state = controller.start_edit(FormState(), editing.id).state

        result = controller.delete_record(state, other.id, always_yes)

        assert result.state.editing_id == editing.id

    def test_delete_missing_id(self, controller, store):
        create(controller)
        result = controller.delete_record(FormState(), 42, always_yes)

        assert result.error == "not_found"
        assert len(store.load()) == 1

    def test_delete_missing_id_being_edited(self, controller, store):
        record = create(controller)
        state = controller.start_edit(FormState(), record.id).state
        store.save([])

        result = controller.delete_record(state, record.id, always_yes)

        assert result.error == "not_found"
        assert result.state == FormState()


class TestCharCount:
    """Tests for the advisory counter"""

    def test_under_limit(self, controller):
        counter = controller.char_count("abc")
        assert counter.length == 3
        assert counter.over_limit is False
        assert counter.label == "文字数：3"

    def test_over_limit(self, controller):
        counter = controller.char_count("x" * 401)
        assert counter.over_limit is True
        assert "400字を超えています" in counter.label

    def test_exactly_at_limit(self, controller):
        assert controller.char_count("x" * 400).over_limit is False


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
