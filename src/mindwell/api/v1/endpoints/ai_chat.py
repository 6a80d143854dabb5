"""Authenticated generative assistant endpoint."""

from fastapi import APIRouter

from mindwell.api.v1.dependencies import AssistantDep, CurrentIdentityDep, http_error
from mindwell.core.errors import MindWellError
from mindwell.schemas.chat import AIChatRequest, AIChatResponse

router = APIRouter(prefix="/ai-chat", tags=["ai-chat"])


@router.post("", response_model=AIChatResponse)
async def ai_chat(
    payload: AIChatRequest,
    identity: CurrentIdentityDep,
    assistant: AssistantDep,
) -> AIChatResponse:
    """Answer a wellness question for a signed-in user.

    Raises:
        HTTPException: 401 without a valid token, 503 when the assistant is not
            configured, 500 on upstream failures or a safety block.
    """
    try:
        text = await assistant.reply(payload.message)
    except MindWellError as exc:
        raise http_error(exc) from exc
    return AIChatResponse(response=text)
