# gsi_orders/api/routers/chatbot.py
from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import StreamingResponse

from gsi_orders.api.deps import get_chat_client
from gsi_orders.domain.errors import ShopError
from gsi_orders.domain.schemas import ChatbotIn, ChatbotOut
from gsi_orders.services.chat_client import ChatClient
from gsi_orders.services.chatbot_service import ChatbotService

router = APIRouter(tags=["chatbot"])

SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


@router.post("/chatbot", response_model=ChatbotOut)
def chatbot(
    payload: ChatbotIn,
    request: Request,
    client: ChatClient = Depends(get_chat_client),
):
    svc = ChatbotService(client)
    wants_stream = "text/event-stream" in request.headers.get("accept", "")
    try:
        if wants_stream:
            events = svc.ask_stream(payload)
            return StreamingResponse(events, media_type="text/event-stream", headers=SSE_HEADERS)
        return svc.ask(payload)
    except ShopError as e:
        raise HTTPException(status_code=e.status_code, detail=e.to_dict())
