"""
Slot Storage - File-backed key-value slots
ファイルに保存するキー・バリュー形式のストレージ

Each slot is one UTF-8 file named after its key. Writes go to a temporary
file in the same directory and replace the slot file in one step.
"""

from pathlib import Path
from typing import List, Optional
import logging
import os
import re
import tempfile
import threading

logger = logging.getLogger(__name__)

SLOT_SUFFIX = ".json"

# Keys become file names
_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.\-]+$")

# Serialises writers within one process (e.g. several Streamlit sessions)
_write_lock = threading.Lock()


class SlotStorage:
    """Key-value storage with one file per slot / スロット単位のストレージ"""

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def _slot_path(self, key: str) -> Path:
        if not key or not _KEY_PATTERN.match(key) or key.startswith("."):
            raise ValueError(f"Invalid slot key: {key!r}")
        return self.directory / f"{key}{SLOT_SUFFIX}"

    def get_item(self, key: str) -> Optional[str]:
        """
        Read a slot
        スロットを読み込む

        Args:
            key: Slot name

        Returns:
            Stored text or None if the slot does not exist

        Raises:
            UnicodeDecodeError: If the slot file is not valid UTF-8
        """
        raw = self.get_bytes(key)
        return None if raw is None else raw.decode("utf-8")

    def get_bytes(self, key: str) -> Optional[bytes]:
        """Read a slot without decoding it / スロットをバイト列で読み込む"""
        path = self._slot_path(key)
        try:
            return path.read_bytes()
        except FileNotFoundError:
            return None

    def set_item(self, key: str, value: str) -> None:
        """
        Overwrite a slot in a single replace step
        スロットを上書き保存する

        Args:
            key: Slot name
            value: Text to store
        """
        self.set_bytes(key, value.encode("utf-8"))

    def set_bytes(self, key: str, value: bytes) -> None:
        """Overwrite a slot with raw bytes / バイト列でスロットを上書きする"""
        path = self._slot_path(key)
        with _write_lock:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=str(self.directory))
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.remove(tmp_name)
                raise
        logger.debug("Wrote slot %s (%d bytes)", key, len(value))

    def remove_item(self, key: str) -> None:
        """Delete a slot if it exists / スロットを削除する"""
        path = self._slot_path(key)
        with _write_lock:
            try:
                path.unlink()
            except FileNotFoundError:
                return
        logger.debug("Removed slot %s", key)

    def keys(self) -> List[str]:
        """List existing slot names"""
        if not self.directory.exists():
            return []
        return sorted(
            p.name[:-len(SLOT_SUFFIX)]
            for p in self.directory.iterdir()
            if p.is_file() and p.name.endswith(SLOT_SUFFIX) and not p.name.startswith(".")
        )
