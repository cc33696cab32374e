#!/usr/bin/env python3
"""
Import a legacy on-disk layout (files/ and boilerplates/ trees) into the database.

Usage:
    python scripts/import_legacy_layout.py /srv/cabinet
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path to import cabinet modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from cabinet.core.config import get_settings
from cabinet.core.legacy_import import import_legacy_layout
from cabinet.core.logging_config import setup_logging
from cabinet.database import SessionLocal, init_db


def main() -> int:
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("root", type=Path, help="Directory containing files/ and boilerplates/")
    args = parser.parse_args()

    if not args.root.is_dir():
        print(f"[Error] Legacy root not found: {args.root}")
        return 1

    settings = get_settings()
    setup_logging(log_level=settings.log_level, log_format="text")

    print("[Setup] Creating database tables...")
    init_db()

    db = SessionLocal()
    try:
        result = import_legacy_layout(db, args.root)
    except Exception as e:
        print(f"\n[Fatal Error] Import failed: {e}")
        db.rollback()
        raise
    finally:
        db.close()

    print(f"[Summary] {result}")
    for error in result.errors:
        print(f"  [Failed] {error}")
    return 1 if result.failed else 0


if __name__ == "__main__":
    sys.exit(main())
