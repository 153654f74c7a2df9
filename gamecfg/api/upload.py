"""Upload API routes"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile

from ..exceptions import GameCfgError, ValidationError
from ..services.file_store import FILE_TYPE_IMAGE, FileStore, file_store
from ..services.log_service import log_service

router = APIRouter(tags=["upload"])


def get_file_store() -> FileStore:
    """Dependency for the upload store (overridable in tests)"""
    return file_store


@router.post("/upload")
async def upload_file(
    file: Optional[UploadFile] = File(None),
    file_type: str = Form(FILE_TYPE_IMAGE, alias="fileType"),
    store: FileStore = Depends(get_file_store),
):
    """
    Upload an icon image (fileType=image) or import a configuration file
    (fileType=config). Images return {url}, config files {content, fileName}.
    """
    if file is None or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")

    try:
        store.check_size(file_type, file.size)
        data = await file.read()
        result = await store.handle_upload(
            file_type, data, file.filename, content_type=file.content_type
        )
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except GameCfgError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        log_service.error(f"Error handling upload {file.filename}: {e}")
        raise HTTPException(status_code=500, detail="Failed to process upload")
    finally:
        await file.close()

    if "file_name" in result:
        return {"content": result["content"], "fileName": result["file_name"]}
    return result
