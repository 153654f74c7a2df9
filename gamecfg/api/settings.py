"""Setting (configuration file) API routes"""

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..exceptions import NotFoundError, ValidationError
from ..schemas.game import SettingDetail
from ..schemas.setting import SettingCreate, SettingResponse, SettingUpdate
from ..services.log_service import log_service
from ..services.setting_service import SettingService

router = APIRouter(prefix="/settings", tags=["settings"])


@router.get("", response_model=List[SettingResponse])
async def list_settings(
    game_id: Optional[str] = Query(None, alias="gameId"),
    db: AsyncSession = Depends(get_db),
):
    """List a game's settings, most recently updated first"""
    try:
        return await SettingService(db).list_settings(game_id)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        log_service.error(f"Error fetching settings for game {game_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch settings")


@router.post("", response_model=SettingResponse, status_code=201)
async def create_setting(data: SettingCreate, db: AsyncSession = Depends(get_db)):
    """Add a configuration file to a game"""
    try:
        return await SettingService(db).create_setting(
            name=data.name, content=data.content, game_id=data.game_id
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        log_service.error(f"Error creating setting: {e}")
        raise HTTPException(status_code=500, detail="Failed to create setting")


@router.get("/{setting_id}", response_model=SettingDetail)
async def get_setting(setting_id: str, db: AsyncSession = Depends(get_db)):
    """Get one setting with its owning game"""
    try:
        return await SettingService(db).get_setting(setting_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        log_service.error(f"Error fetching setting {setting_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch setting")


@router.put("/{setting_id}", response_model=SettingResponse)
async def update_setting(
    setting_id: str, data: SettingUpdate, db: AsyncSession = Depends(get_db)
):
    """Update a setting's name and content"""
    try:
        return await SettingService(db).update_setting(
            setting_id, name=data.name, content=data.content
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except Exception as e:
        log_service.error(f"Error updating setting {setting_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to update setting")


@router.delete("/{setting_id}")
async def delete_setting(setting_id: str, db: AsyncSession = Depends(get_db)):
    """Delete a setting"""
    try:
        await SettingService(db).delete_setting(setting_id)
        return {"success": True}
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        log_service.error(f"Error deleting setting {setting_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete setting")
