#!/usr/bin/env python3
"""
CLI script to check the persisted draft collection
保存データの検査スクリプト
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from motivation_drafts.config_loader import load_config, list_available_configs
from motivation_drafts.draft_store import DraftStore, decode_records
from motivation_drafts.exceptions import MalformedDraftDataError
from motivation_drafts.slot_storage import SlotStorage


def check_store(config_id: str, directory: Path = None) -> bool:
    """
    Check that the draft slot parses
    下書きスロットが正しく読み込めるか検査する

    Args:
        config_id: ID of the configuration to use
        directory: Optional storage directory overriding the configuration

    Returns:
        True if valid, False otherwise
    """
    print(f"\n{'='*60}")
    print(f"Checking drafts: {config_id}")
    print(f"{'='*60}")

    errors = []
    warnings = []

    config = load_config(config_id)
    storage = SlotStorage(directory or config.get_storage_directory())
    store = DraftStore(storage, config.get_slot())

    print("\n[Storage]")
    print(f"  Directory: {storage.directory}")
    print(f"  Slot: {store.slot}")
    print(f"  Slots present: {', '.join(storage.keys()) or '(none)'}")

    print("\n[Drafts]")
    raw = storage.get_bytes(store.slot)
    if raw is None:
        warnings.append("Draft slot does not exist yet")
    else:
        try:
            records = decode_records(raw)
            print(f"  Total drafts: {len(records)}")
            edited = sum(1 for r in records if r.updated_at)
            print(f"  Edited drafts: {edited}")
            questions = sum(len(r.additional_questions) for r in records)
            print(f"  Question sections: {questions}")

            limit = config.get_char_limit()
            for r in records:
                if len(r.motivation_text) > limit:
                    warnings.append(f"Draft {r.id} ({r.company_name}) exceeds {limit} characters")
        except MalformedDraftDataError as e:
            errors.append(f"Malformed draft data: {e}")

    for slot in store.backup_slots():
        warnings.append(f"Backup of malformed data present in slot {slot}")

    # Print results
    print(f"\n{'='*60}")
    print("Check Results")
    print(f"{'='*60}")

    if errors:
        print(f"\nERRORS ({len(errors)}):")
        for err in errors:
            print(f"  [X] {err}")

    if warnings:
        print(f"\nWARNINGS ({len(warnings)}):")
        for warn in warnings:
            print(f"  [!] {warn}")

    if not errors and not warnings:
        print("\n[OK] Draft data is valid with no issues!")

    elif not errors:
        print(f"\n[OK] Draft data is valid with {len(warnings)} warning(s)")

    else:
        print(f"\n[FAIL] Draft data has {len(errors)} error(s)")
        return False

    return True


def main():
    """Main CLI entry point / CLIエントリポイント"""
    parser = argparse.ArgumentParser(
        description="Check the persisted draft collection"
    )

    parser.add_argument(
        "--config",
        "-c",
        default="motivation_drafts",
        help="Configuration ID to use"
    )

    parser.add_argument(
        "--directory",
        "-d",
        type=Path,
        help="Storage directory (defaults to the configured one)"
    )

    parser.add_argument(
        "--list",
        "-l",
        action="store_true",
        help="List available configurations"
    )

    args = parser.parse_args()

    if args.list:
        configs = list_available_configs()
        print("Available configurations:")
        for c in configs:
            print(f"  - {c}")
        return 0

    return 0 if check_store(args.config, args.directory) else 1


if __name__ == "__main__":
    sys.exit(main())
