from fastapi import APIRouter
from fastapi.responses import StreamingResponse

from app.schemas.assistant import ChatRequest
from app.services import assistant_service

router = APIRouter(prefix="/assistant", tags=["assistant"])


@router.post("/chat")
def chat(payload: ChatRequest):
    # open_stream raises before streaming starts, so gateway errors keep their status code
    response = assistant_service.open_stream([m.model_dump() for m in payload.messages])
    return StreamingResponse(
        assistant_service.relay(response),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"},
    )
