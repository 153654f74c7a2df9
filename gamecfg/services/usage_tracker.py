"""Usage counter bumps for game detail reads"""

from sqlalchemy import update

from ..database import AsyncSessionLocal
from ..models.game import Game
from .log_service import log_service


class UsageTracker:
    """
    Increments Game.usage_count outside the request's own session.

    Meant to run as a background task: failures are logged and dropped so
    the read that triggered the bump never fails because of it.
    """

    def __init__(self, session_factory=None):
        self.session_factory = session_factory or AsyncSessionLocal

    async def increment(self, game_id: str) -> bool:
        """Atomically add one to the counter; returns False on failure"""
        try:
            async with self.session_factory() as db:
                await db.execute(
                    update(Game)
                    .where(Game.id == game_id)
                    .values(
                        usage_count=Game.usage_count + 1,
                        # reads are not edits
                        updated_at=Game.updated_at,
                    )
                    .execution_options(synchronize_session=False)
                )
                await db.commit()
            return True
        except Exception as e:
            log_service.error(f"Error updating usage count for game {game_id}: {e}")
            return False


usage_tracker = UsageTracker()
