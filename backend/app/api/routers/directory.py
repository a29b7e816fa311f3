from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.db.base import get_db
from app.schemas.directory import DirectoryEntryOut, DirectorySort
from app.services import directory_service

router = APIRouter(prefix="/headhunters", tags=["directory"])


@router.get("", response_model=list[DirectoryEntryOut])
def search_directory(
    search: Optional[str] = Query(None),
    industry: Optional[str] = Query(None),
    availability: Optional[str] = Query(None),
    sort: DirectorySort = Query("rating"),
    db: Session = Depends(get_db),
):
    return directory_service.search_directory(
        db, search=search, industry=industry, availability=availability, sort=sort,
    )
