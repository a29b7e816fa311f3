from typing import Literal
from uuid import UUID
from pydantic import BaseModel

from app.schemas.profile import PublicProfileOut

DirectorySort = Literal["rating", "success_rate", "response_time"]


class DirectoryEntryOut(PublicProfileOut):
    saved_count: int = 0


class SavedCountsIn(BaseModel):
    headhunter_ids: list[UUID]
