"""
Exceptions - Error types for draft handling
下書き処理のエラー型
"""


class DraftError(Exception):
    """Base exception for draft operations"""
    pass


class DraftNotFoundError(DraftError):
    """Raised when an edit or delete references a missing draft id"""

    def __init__(self, draft_id: int):
        super().__init__(f"Draft not found: {draft_id}")
        self.draft_id = draft_id


class MalformedDraftDataError(DraftError):
    """Raised when a persisted draft blob does not match the expected shape"""
    pass
