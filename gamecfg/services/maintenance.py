"""Operator maintenance tasks (run from scripts/maintenance.py)"""

from typing import Dict, List

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..models.game import Game
from .file_store import FileStore
from .log_service import log_service


def clean_external_urls(
    db: Session, url_prefix: str = "/uploads/", dry_run: bool = False
) -> List[Dict]:
    """
    Null out icon URLs that do not point at a local upload.

    Returns one {id, name, icon_url} entry per affected game.
    """
    games = (
        db.execute(
            select(Game).where(
                Game.icon_url.is_not(None), ~Game.icon_url.startswith(url_prefix)
            )
        )
        .scalars()
        .all()
    )

    cleaned = [{"id": g.id, "name": g.name, "icon_url": g.icon_url} for g in games]
    if dry_run:
        return cleaned

    for game in games:
        game.icon_url = None
    db.commit()

    if cleaned:
        log_service.info(f"Cleared {len(cleaned)} external icon URLs")
    return cleaned


def prune_uploads(db: Session, store: FileStore, dry_run: bool = False) -> List[str]:
    """
    Delete files in the uploads directory that no game references.

    These are left behind when an icon is replaced, when a game is deleted,
    or when the follow-up game update after an upload fails.
    """
    referenced = set()
    for (url,) in db.execute(
        select(Game.icon_url).where(Game.icon_url.is_not(None))
    ):
        path = store.path_for_url(url)
        if path is not None:
            referenced.add(path.name)

    if not store.uploads_dir.exists():
        return []

    orphans = sorted(
        path
        for path in store.uploads_dir.iterdir()
        if path.is_file() and path.name not in referenced
    )

    if not dry_run:
        for path in orphans:
            path.unlink()
        if orphans:
            log_service.info(f"Pruned {len(orphans)} unreferenced uploads")

    return [path.name for path in orphans]
