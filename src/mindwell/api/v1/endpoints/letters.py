# src/mindwell/api/v1/endpoints/letters.py
"""Anonymous letters board endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Path, Query, status

from mindwell.api.v1.dependencies import LetterBoardDep, OptionalIdentityDep, http_error
from mindwell.core.errors import ForbiddenError, MindWellError
from mindwell.core.settings import settings
from mindwell.models.letter import Letter
from mindwell.repositories.letter_repo import SortMode
from mindwell.schemas.common import MessageResponse
from mindwell.schemas.letter import (
    LetterCreate,
    LetterCreated,
    LetterDelete,
    LetterResponse,
    LikeResponse,
    ReplyCreate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/letters", tags=["letters"])

LetterId = Annotated[
    str,
    Path(pattern=r"^[A-Za-z0-9]{18,28}$", description="Letter identifier"),
]


@router.get("", response_model=list[LetterResponse])
async def list_letters(
    board: LetterBoardDep,
    sort: SortMode = Query(SortMode.LATEST, description="Ordering: latest or popular"),
    page: int = Query(1, description="1-based page number; values below 1 mean 1"),
    limit: int | None = Query(
        None,
        ge=1,
        le=settings.letters_max_page_size,
        description="Letters per page",
    ),
) -> list[Letter]:
    """List letters newest first or by like count, one page at a time.

    Args:
        board: Letters board bound to the request session
        sort: ``latest`` (creation time) or ``popular`` (likes)
        page: Page number; offsets are not stable across concurrent writes
        limit: Page size, defaulting to the configured board page size

    Returns:
        The requested page of letters, possibly empty
    """
    return board.fetch(sort=sort, page=page, limit=limit)


@router.post("", response_model=LetterCreated, status_code=status.HTTP_201_CREATED)
async def submit_letter(
    payload: LetterCreate,
    board: LetterBoardDep,
    identity: OptionalIdentityDep,
) -> LetterCreated:
    """Moderate and publish a new letter.

    When a bearer token is presented, the verified identity's handle is used
    as the author; otherwise the ``username`` from the body is used.

    Raises:
        HTTPException: 400 for missing fields or a moderation rejection.
    """
    username = identity.handle if identity else payload.username
    try:
        letter = await board.submit(
            content=payload.content,
            username=username,
            title=payload.title,
            mood=payload.mood,
        )
    except MindWellError as exc:
        raise http_error(exc) from exc
    return LetterCreated(message="Letter posted successfully!", id=letter.id)


@router.post("/{letter_id}/like", response_model=LikeResponse)
async def like_letter(letter_id: LetterId, board: LetterBoardDep) -> LikeResponse:
    """Add one like to a letter and return the new count.

    Raises:
        HTTPException: 404 if the letter does not exist.
    """
    try:
        new_likes = board.like(letter_id)
    except MindWellError as exc:
        raise http_error(exc) from exc
    return LikeResponse(message="Letter liked successfully!", new_likes=new_likes)


@router.post(
    "/{letter_id}/reply",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
)
async def reply_to_letter(
    letter_id: LetterId,
    payload: ReplyCreate,
    board: LetterBoardDep,
) -> MessageResponse:
    """Append a reply to a letter.

    Raises:
        HTTPException: 400 for missing fields or a moderation rejection, 404 if
            the letter does not exist.
    """
    try:
        await board.reply(letter_id, content=payload.text, username=payload.username)
    except MindWellError as exc:
        raise http_error(exc) from exc
    return MessageResponse(message="Reply added successfully!")


@router.delete("/{letter_id}", response_model=MessageResponse)
async def delete_letter(
    letter_id: LetterId,
    payload: LetterDelete,
    board: LetterBoardDep,
) -> MessageResponse:
    """Delete a letter when the supplied username matches its author.

    The username is taken from the request body as sent by the client.

    Raises:
        HTTPException: 403 if the username is not the author's, 404 if the
            letter does not exist.
    """
    try:
        board.delete(letter_id, username=payload.username)
    except ForbiddenError as exc:
        logger.warning(
            "Forbidden DELETE attempt on letter %s by %s",
            letter_id,
            payload.username,
        )
        raise http_error(exc) from exc
    except MindWellError as exc:
        raise http_error(exc) from exc
    return MessageResponse(message="Letter deleted successfully.")
