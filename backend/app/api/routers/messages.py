# Purpose: Messaging routes: send / edit, conversation views, stars and attachment uploads.

from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query, UploadFile, File
from sqlalchemy.orm import Session

from app.api.deps import get_current_user
from app.db.base import get_db
from app.models.profile import Profile
from app.schemas.message import MessageCreate, MessageEdit, MessageOut, ConversationSummary, StarIn, Attachment
from app.services import messaging_service

router = APIRouter(prefix="/messages", tags=["messages"])


@router.post("", response_model=MessageOut, status_code=201)
def send_message(payload: MessageCreate, user: Profile = Depends(get_current_user), db: Session = Depends(get_db)):
    msg = messaging_service.send_message(
        db,
        user,
        to_user=payload.to_user,
        body=payload.body,
        job_id=payload.job_id,
        reply_to=payload.reply_to,
        attachments=[a.model_dump() for a in payload.attachments],
    )
    return messaging_service.message_to_dict(msg)


@router.get("/conversations", response_model=list[ConversationSummary])
def list_conversations(user: Profile = Depends(get_current_user), db: Session = Depends(get_db)):
    return messaging_service.list_conversations(db, user)


@router.get("/conversation", response_model=list[MessageOut])
def get_conversation(
    with_user: UUID = Query(..., alias="with"),
    job: Optional[UUID] = Query(None),
    user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return messaging_service.get_conversation(db, user, with_user, job)


@router.delete("/conversation")
def delete_conversation(
    with_user: UUID = Query(..., alias="with"),
    job: Optional[UUID] = Query(None),
    user: Profile = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    deleted = messaging_service.delete_conversation(db, user, with_user, job)
    return {"deleted": deleted}


@router.post("/star")
def star(payload: StarIn, user: Profile = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"starred": messaging_service.star_conversation(db, user, payload.other_user_id, payload.job_id)}


@router.delete("/star")
def unstar(payload: StarIn, user: Profile = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"starred": messaging_service.unstar_conversation(db, user, payload.other_user_id, payload.job_id)}


@router.post("/attachments", response_model=list[Attachment], status_code=201)
async def upload_attachments(files: list[UploadFile] = File(...), user: Profile = Depends(get_current_user)):
    blobs = [(f.filename or "file", f.content_type, await f.read()) for f in files]
    return messaging_service.upload_attachments(user, blobs)


@router.patch("/{message_id}", response_model=MessageOut)
def edit_message(message_id: UUID, payload: MessageEdit, user: Profile = Depends(get_current_user), db: Session = Depends(get_db)):
    msg = messaging_service.edit_message(db, user, message_id, payload.body)
    return messaging_service.message_to_dict(msg)
