#!/usr/bin/env python3
"""
Run the Streamlit application
Streamlitアプリを起動する
"""

import subprocess
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from motivation_drafts.config_loader import load_config


def main():
    """Launch the Streamlit app / アプリを起動する"""
    app_path = PROJECT_ROOT / "ui" / "streamlit_app" / "app.py"

    if not app_path.exists():
        print(f"Error: App not found at {app_path}")
        sys.exit(1)

    config = load_config()
    title = config.get_ui().get("title", "志望動機メモ")
    storage_dir = config.get_storage_directory()

    print(f"Starting {title}...")
    print(f"App path: {app_path}")
    print(f"Drafts: {storage_dir / (config.get_slot() + '.json')}")

    try:
        subprocess.run([
            sys.executable, "-m", "streamlit", "run",
            str(app_path),
            "--server.headless=true"
        ], check=True)
    except KeyboardInterrupt:
        print("\nApp stopped.")
    except subprocess.CalledProcessError as e:
        print(f"Error running app: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
