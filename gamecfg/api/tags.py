"""Tag API routes"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..schemas.tag import TagWithCount
from ..services.log_service import log_service
from ..services.tag_service import TagService

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("", response_model=List[TagWithCount])
async def list_tags(db: AsyncSession = Depends(get_db)):
    """List all tags with the number of games using each"""
    try:
        rows = await TagService(db).list_with_counts()
        return [
            TagWithCount(id=tag.id, name=tag.name, game_count=count)
            for tag, count in rows
        ]
    except Exception as e:
        log_service.error(f"Error fetching tags: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch tags")
