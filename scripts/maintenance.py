#!/usr/bin/env python3
"""
Maintenance utility: clean external icon URLs, prune unreferenced uploads
"""

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from gamecfg.database import SessionLocal
from gamecfg.services.file_store import FileStore
from gamecfg.services.maintenance import clean_external_urls, prune_uploads


def run_clean_external_urls(dry_run: bool):
    db = SessionLocal()
    try:
        cleaned = clean_external_urls(db, dry_run=dry_run)
        print(f"Found {len(cleaned)} games with external icon URLs")
        for entry in cleaned:
            print(f"  {entry['id']} - {entry['name']}: {entry['icon_url']}")
        if cleaned and not dry_run:
            print("Icon URLs cleared")
    finally:
        db.close()


def run_prune_uploads(dry_run: bool):
    db = SessionLocal()
    try:
        orphans = prune_uploads(db, FileStore(), dry_run=dry_run)
        action = "Would delete" if dry_run else "Deleted"
        print(f"{action} {len(orphans)} unreferenced uploads")
        for name in orphans:
            print(f"  {name}")
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="GameCfg maintenance tasks")
    parser.add_argument(
        "task",
        choices=["clean-external-urls", "prune-uploads"],
        help="Task to run",
    )
    parser.add_argument(
        "--dry-run", action="store_true", help="Show what would change"
    )

    args = parser.parse_args()
    if args.task == "clean-external-urls":
        run_clean_external_urls(args.dry_run)
    else:
        run_prune_uploads(args.dry_run)
