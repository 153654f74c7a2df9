"""Game API routes"""

from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..database import get_db
from ..exceptions import NotFoundError, ValidationError
from ..schemas.game import GameCreate, GameResponse, GameUpdate
from ..services.game_service import GameService
from ..services.log_service import log_service
from ..services.usage_tracker import UsageTracker, usage_tracker

router = APIRouter(prefix="/games", tags=["games"])


def get_usage_tracker() -> UsageTracker:
    """Dependency for the usage counter (overridable in tests)"""
    return usage_tracker


@router.get("", response_model=List[GameResponse])
async def list_games(
    search: Optional[str] = Query(None),
    tag: Optional[str] = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """List games, most used first, optionally filtered by name and tag"""
    try:
        return await GameService(db).list_games(search=search, tag_name=tag)
    except Exception as e:
        log_service.error(f"Error fetching games: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch games")


@router.post("", response_model=GameResponse, status_code=201)
async def create_game(data: GameCreate, db: AsyncSession = Depends(get_db)):
    """Register a new game"""
    try:
        return await GameService(db).create_game(
            name=data.name, icon_url=data.icon_url, tags=data.tags
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        log_service.error(f"Error creating game: {e}")
        raise HTTPException(status_code=500, detail="Failed to create game")


@router.get("/{identifier}", response_model=GameResponse)
async def get_game(
    identifier: str,
    response: Response,
    background_tasks: BackgroundTasks,
    db: AsyncSession = Depends(get_db),
    tracker: UsageTracker = Depends(get_usage_tracker),
):
    """
    Get one game by id (or by name when no id matches).
    Bumps the usage counter after the response is sent.
    """
    try:
        game = await GameService(db).get_game(identifier)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        log_service.error(f"Error fetching game {identifier}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch game details")

    # Give the pooled connection back before the bump opens its own;
    # the loaded game stays usable since sessions don't expire on commit
    await db.close()

    # Not awaited by this response
    background_tasks.add_task(tracker.increment, game.id)

    if settings.GAME_CACHE_MAX_AGE > 0:
        max_age = settings.GAME_CACHE_MAX_AGE
        response.headers["Cache-Control"] = (
            f"max-age={max_age}, s-maxage={max_age}, stale-while-revalidate"
        )

    return game


@router.put("/{game_id}", response_model=GameResponse)
async def update_game(
    game_id: str, data: GameUpdate, db: AsyncSession = Depends(get_db)
):
    """Update name and icon, replacing the game's tags"""
    try:
        return await GameService(db).update_game(
            game_id, name=data.name, icon_url=data.icon_url, tags=data.tags
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        log_service.error(f"Error updating game {game_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update game")


@router.delete("/{game_id}")
async def delete_game(game_id: str, db: AsyncSession = Depends(get_db)):
    """Delete a game and all of its configuration files"""
    try:
        await GameService(db).delete_game(game_id)
        return {"success": True}
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        log_service.error(f"Error deleting game {game_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete game")
