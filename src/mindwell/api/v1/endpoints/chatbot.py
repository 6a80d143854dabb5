"""Rule-based emotion chatbot endpoint."""

import logging

from fastapi import APIRouter

from mindwell.schemas.chat import ChatbotRequest, ChatbotResponse
from mindwell.services import emotion

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chatbot", tags=["chatbot"])


@router.post("", response_model=ChatbotResponse)
async def chat(payload: ChatbotRequest) -> ChatbotResponse:
    """Classify the message's emotion and answer with the matching canned reply."""
    label = emotion.classify(payload.message)
    logger.info("Chatbot detected emotion %s", label)
    return ChatbotResponse(reply=emotion.respond(label), emotion=label)
