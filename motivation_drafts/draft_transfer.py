"""
Draft Transfer - JSON export and import of the draft collection
下書きのJSONエクスポート・インポート
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Union
import json
import logging

from .draft_models import DraftRecord
from .draft_store import decode_records, parse_records
from .exceptions import MalformedDraftDataError

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    """Result of an import / インポート結果"""
    records: List[DraftRecord] = field(default_factory=list)
    imported: int = 0
    skipped: int = 0
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error is None


def export_records(records: Sequence[DraftRecord]) -> str:
    """Export the collection as pretty-printed JSON"""
    return json.dumps([r.to_storage_dict() for r in records], indent=2, ensure_ascii=False)


def import_records(existing: Sequence[DraftRecord], text: Union[str, bytes]) -> ImportResult:
    """
    Merge exported drafts into an existing collection
    エクスポートした下書きを既存のコレクションに取り込む

    Drafts whose id is already present are skipped. New drafts go to the
    front, keeping their order in the file.

    Args:
        existing: Current collection
        text: JSON text produced by export_records, or the raw bytes of
            an uploaded file

    Returns:
        ImportResult with the merged collection, or the unchanged
        collection and an error message
    """
    try:
        incoming = decode_records(text) if isinstance(text, bytes) else parse_records(text)
    except MalformedDraftDataError as e:
        logger.warning("Import rejected: %s", e)
        return ImportResult(records=list(existing), error=str(e))

    known_ids = {r.id for r in existing}
    added = [r for r in incoming if r.id not in known_ids]
    skipped = len(incoming) - len(added)

    logger.info("Imported %d draft(s), skipped %d duplicate id(s)", len(added), skipped)
    return ImportResult(records=added + list(existing), imported=len(added), skipped=skipped)
