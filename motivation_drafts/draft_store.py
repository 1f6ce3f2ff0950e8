"""
Draft Store - Whole-collection persistence of drafts
下書きコレクション全体の読み書き

The collection lives in one slot as a JSON array, most recent first.
There is no append API: callers read the full collection, change it in
memory and write it back.
"""

from typing import List, Optional, Sequence
import json
import logging

from pydantic import ValidationError as PydanticValidationError

from .draft_models import DraftRecord
from .exceptions import MalformedDraftDataError
from .slot_storage import SlotStorage

logger = logging.getLogger(__name__)

MALFORMED_SUFFIX = ".malformed"


def parse_records(text: str) -> List[DraftRecord]:
    """
    Strictly parse a serialized draft collection
    保存データを厳密に解析する

    Args:
        text: JSON text of the collection

    Returns:
        List of DraftRecord in stored order

    Raises:
        MalformedDraftDataError: If the text is not a JSON array of drafts
            or ids are duplicated
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedDraftDataError(f"Invalid JSON: {e}")

    if not isinstance(data, list):
        raise MalformedDraftDataError(f"Expected a JSON array, got {type(data).__name__}")

    records = []
    seen_ids = set()
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise MalformedDraftDataError(f"Item {i} is not an object")
        try:
            record = DraftRecord.model_validate(item)
        except PydanticValidationError as e:
            raise MalformedDraftDataError(f"Item {i} does not match the draft shape: {e}")
        if record.id in seen_ids:
            raise MalformedDraftDataError(f"Duplicate draft id: {record.id}")
        seen_ids.add(record.id)
        records.append(record)

    return records


def decode_records(raw: bytes) -> List[DraftRecord]:
    """
    Decode and parse the raw bytes of a slot
    スロットのバイト列を解析する

    A blank slot is an empty collection.

    Raises:
        MalformedDraftDataError: If the bytes are not UTF-8 or not a valid
            draft collection
    """
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedDraftDataError(f"Slot is not valid UTF-8: {e}")

    if text.strip() == "":
        return []
    return parse_records(text)


def serialize_records(records: Sequence[DraftRecord]) -> str:
    """Serialize a collection to the persisted JSON layout"""
    return json.dumps([r.to_storage_dict() for r in records], ensure_ascii=False)


class DraftStore:
    """
    Reads and writes the draft collection in a storage slot
    下書きコレクションをスロットに保存する
    """

    def __init__(self, storage: SlotStorage, slot: str = "esDrafts"):
        self.storage = storage
        self.slot = slot
        self.last_warning: Optional[str] = None

    @property
    def backup_slot(self) -> str:
        return f"{self.slot}{MALFORMED_SUFFIX}"

    def backup_slots(self) -> List[str]:
        """Existing backup slots, oldest first / 退避済みスロットの一覧"""
        prefix = f"{self.backup_slot}."
        numbered = [k for k in self.storage.keys() if k.startswith(prefix) and k[len(prefix):].isdigit()]
        numbered.sort(key=lambda k: int(k[len(prefix):]))
        if self.storage.get_bytes(self.backup_slot) is not None:
            numbered.insert(0, self.backup_slot)
        return numbered

    def load(self) -> List[DraftRecord]:
        """
        Load the collection; malformed data yields an empty collection
        コレクションを読み込む（不正データは空として扱う）

        A malformed blob is copied to a backup slot and reported through
        last_warning before the empty collection is returned.

        Returns:
            List of DraftRecord, most recent first
        """
        self.last_warning = None
        raw = self.storage.get_bytes(self.slot)
        if raw is None:
            return []

        try:
            return decode_records(raw)
        except MalformedDraftDataError as e:
            self.last_warning = str(e)
            logger.warning("Malformed draft data in slot %s: %s", self.slot, e)
            self._backup_malformed(raw)
            return []

    def save(self, records: Sequence[DraftRecord]) -> None:
        """
        Overwrite the whole collection in one write
        コレクション全体を上書き保存する

        Args:
            records: Full collection, most recent first
        """
        self.storage.set_item(self.slot, serialize_records(records))
        logger.info("Saved %d draft(s) to slot %s", len(records), self.slot)

    def _backup_malformed(self, raw: bytes) -> None:
        # Earlier backups are never overwritten; a different blob goes to the next free numbered slot
        index = 0
        while True:
            slot = self.backup_slot if index == 0 else f"{self.backup_slot}.{index}"
            existing = self.storage.get_bytes(slot)
            if existing == raw:
                return
            if existing is None:
                break
            index += 1

        self.storage.set_bytes(slot, raw)
        logger.warning("Copied malformed data to slot %s", slot)
