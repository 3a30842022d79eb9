from fastapi import APIRouter, Depends, File, UploadFile
from pydantic import BaseModel

from claimdesk.routes.deps import get_storage
from claimdesk.services.storage_service import StorageService, object_key

router = APIRouter()

class PresignIn(BaseModel):
    filename: str
    content_type: str

@router.post("")
async def upload_file(file: UploadFile = File(...), storage: StorageService = Depends(get_storage)):
    data = await file.read()
    content_type = file.content_type or "application/octet-stream"
    return storage.upload_bytes(data, file.filename, content_type)

@router.post("/presign")
async def presign_upload(payload: PresignIn, storage: StorageService = Depends(get_storage)):
    return storage.create_upload(object_key(payload.filename), payload.content_type)
