"""
Config Loader - YAML configuration loader with LRU cache
設定ファイル（YAML）の読み込みとキャッシュ
"""

from functools import lru_cache
from pathlib import Path
from typing import Dict, Any, Optional
import yaml


PROJECT_ROOT = Path(__file__).parent.parent
CONFIG_ROOT = PROJECT_ROOT / "config" / "yamls"

DEFAULT_CONFIG_ID = "motivation_drafts"
DEFAULT_SLOT = "esDrafts"
DEFAULT_CHAR_LIMIT = 400

# Fallback texts when config.yaml has no messages section
DEFAULT_MESSAGES = {
    "saved": "「{company_name}」の志望動機を保存しました！",
    "updated": "「{company_name}」の志望動機を更新しました！",
    "required": "企業名と志望動機の両方を入力してください。",
    "confirm_delete": "本当にこの下書きを削除しますか？",
    "deleted": "下書きを削除しました。",
    "delete_cancelled": "削除をキャンセルしました。",
    "not_found": "指定された下書きが見つかりません。",
    "empty_list": "まだ保存された志望動機はありません。",
    "malformed": "保存データを読み込めませんでした。元のデータはバックアップに退避しています。",
    "char_count": "文字数：{length}",
    "over_limit": " (⚠️ {limit}字を超えています)",
    "edit_button": "✏️ フォームに読み込んで編集",
    "edit_help": "この下書きを上のフォームに読み込み、編集モードにします",
}


class FormConfig:
    """Lazy-loading configuration container / 遅延読み込みの設定コンテナ"""

    def __init__(self, config_id: str = DEFAULT_CONFIG_ID, base_path: Optional[Path] = None):
        self.config_id = config_id
        if base_path:
            self.base_path = base_path
        else:
            self.base_path = CONFIG_ROOT / config_id
        self._cache: Dict[str, dict] = {}

    @property
    def manifest(self) -> dict:
        """Config metadata"""
        return self._load("manifest.yaml")

    @property
    def config(self) -> dict:
        """Runtime configuration & UI texts"""
        return self._load("config.yaml")

    @property
    def fields(self) -> dict:
        """Input field definitions"""
        return self._load("fields.yaml")

    def _load(self, filename: str) -> dict:
        """Load a YAML file with caching"""
        if filename not in self._cache:
            file_path = self.base_path / filename
            self._cache[filename] = load_yaml_file(file_path)
        return self._cache[filename]

    def get_storage_directory(self) -> Path:
        """Get the directory holding the storage slots"""
        directory = Path(self.config.get("storage", {}).get("directory", "data/storage"))
        if directory.is_absolute():
            return directory
        return PROJECT_ROOT / directory

    def get_slot(self) -> str:
        """Get the storage slot name for the draft collection"""
        return self.config.get("storage", {}).get("slot", DEFAULT_SLOT)

    def get_char_limit(self) -> int:
        """Get the advisory character limit"""
        return int(self.config.get("form", {}).get("char_limit", DEFAULT_CHAR_LIMIT))

    def get_logging(self) -> dict:
        """Get logging settings"""
        return self.config.get("logging", {})

    def get_ui(self) -> dict:
        """Get page-level UI settings"""
        return self.config.get("ui", {})

    def get_message(self, key: str, **kwargs: Any) -> str:
        """Get a user-facing message, formatted with kwargs"""
        return format_message(self.config.get("messages", {}), key, **kwargs)

    def get_field_spec(self, field_name: str) -> Optional[dict]:
        """Get specification for a specific field"""
        return self.fields.get("fields", {}).get(field_name)

    def get_item_schema(self, field_name: str) -> dict:
        """Get the item schema of a list field"""
        spec = self.get_field_spec(field_name) or {}
        return spec.get("item_schema", {})

    def clear_cache(self):
        """Clear the internal cache"""
        self._cache.clear()


def format_message(messages: Dict[str, str], key: str, **kwargs: Any) -> str:
    """Look up a message template, falling back to the built-in texts"""
    template = messages.get(key) or DEFAULT_MESSAGES.get(key, key)
    return template.format(**kwargs) if kwargs else template


@lru_cache(maxsize=32)
def load_yaml_file(path: Path) -> dict:
    """Cached YAML file loading / キャッシュ付きYAML読み込み"""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}
    except FileNotFoundError:
        return {}
    except yaml.YAMLError as e:
        raise ValueError(f"Error parsing YAML file {path}: {e}")


def load_config(config_id: str = DEFAULT_CONFIG_ID) -> FormConfig:
    """Load a configuration by ID / IDで設定を読み込む"""
    return FormConfig(config_id)


def list_available_configs() -> list:
    """List all available configurations / 利用可能な設定の一覧"""
    if not CONFIG_ROOT.exists():
        return []
    return [d.name for d in CONFIG_ROOT.iterdir() if d.is_dir()]
