# Motivation drafts - Core components
# 志望動機ドラフトの中核コンポーネント

from .config_loader import FormConfig, load_config, load_yaml_file
from .draft_models import DraftRecord, QuestionAnswer, FormState, QuestionSection
from .slot_storage import SlotStorage
from .draft_store import DraftStore, parse_records, decode_records
from .draft_validator import validate_draft, ValidationResult, char_count, CharCount
from .form_controller import FormController, ActionResult
from .list_renderer import render_drafts, DraftListView, DraftListEntry
from .draft_transfer import export_records, import_records, ImportResult
from .exceptions import DraftError, DraftNotFoundError, MalformedDraftDataError

__all__ = [
    'FormConfig',
    'load_config',
    'load_yaml_file',
    'DraftRecord',
    'QuestionAnswer',
    'FormState',
    'QuestionSection',
    'SlotStorage',
    'DraftStore',
    'parse_records',
    'decode_records',
    'validate_draft',
    'ValidationResult',
    'char_count',
    'CharCount',
    'FormController',
    'ActionResult',
    'render_drafts',
    'DraftListView',
    'DraftListEntry',
    'export_records',
    'import_records',
    'ImportResult',
    'DraftError',
    'DraftNotFoundError',
    'MalformedDraftDataError',
]
