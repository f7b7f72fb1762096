"""
Chat assistant route
Upstream failures are answered with an error bubble rather than an error status.
"""

from fastapi import APIRouter, Depends

from ...core.exceptions import ExternalServiceError
from ...core.logger import get_logger
from ...schemas.chat import ChatReply, ChatRequest
from ...services.chat_service import GREETING, ChatService
from ..deps import get_chat_service

router = APIRouter()
logger = get_logger("api.chat")


@router.get("", response_model=ChatReply)
def greeting():
    return ChatReply(text=GREETING)


@router.post("", response_model=ChatReply)
def ask(req: ChatRequest, chat: ChatService = Depends(get_chat_service)):
    try:
        text = chat.ask(req.message)
    except ExternalServiceError as e:
        logger.info("Chat failed: %s", e.error_code)
        return ChatReply(text=f"⚠️ Error: {e.message}", error=True)
    return ChatReply(text=text)
