from fastapi import APIRouter
from fastapi.responses import FileResponse

from app.services.common import storage

router = APIRouter(prefix="/storage", tags=["storage"])


@router.get("/{bucket}/{object_path:path}")
def get_object(bucket: str, object_path: str):
    return FileResponse(storage.resolve(bucket, object_path))
