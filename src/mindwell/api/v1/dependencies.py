"""Shared API dependencies for authentication and service wiring."""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from sqlalchemy.orm import Session

from mindwell.core.errors import MindWellError
from mindwell.core.security import Identity, verify_access_token
from mindwell.db.session import get_db
from mindwell.repositories.letter_repo import LetterRepository
from mindwell.services.assistant import WellnessAssistant
from mindwell.services.facilities import FacilityFinder
from mindwell.services.generative import GenerativeClient, get_generative_client
from mindwell.services.letter_board import LetterBoard
from mindwell.services.moderation import ContentModerator
from mindwell.services.wellness_feed import WellnessFeedClient

logger = logging.getLogger(__name__)

# HTTP Bearer scheme; routes decide whether a token is mandatory.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]
BearerDep = Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)]


def http_error(exc: MindWellError) -> HTTPException:
    """Translate a domain error into the matching HTTP error."""
    return HTTPException(status_code=exc.status_code, detail=exc.message)


def _verify(credentials: HTTPAuthorizationCredentials) -> Identity:
    try:
        return verify_access_token(credentials.credentials)
    except JWTError as err:
        logger.warning("Token verification failed: %s", err)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: Invalid or expired token.",
            headers={"WWW-Authenticate": "Bearer"},
        ) from err


def get_optional_identity(credentials: BearerDep) -> Identity | None:
    """Return the caller's identity if a bearer token was sent.

    Raises:
        HTTPException: If a token was sent but fails verification.
    """
    if credentials is None:
        return None
    return _verify(credentials)


def get_current_identity(credentials: BearerDep) -> Identity:
    """Return the caller's identity, requiring a valid bearer token.

    Raises:
        HTTPException: If the token is missing or invalid.
    """
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: Missing or improperly formatted token.",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return _verify(credentials)


OptionalIdentityDep = Annotated[Identity | None, Depends(get_optional_identity)]
CurrentIdentityDep = Annotated[Identity, Depends(get_current_identity)]


def get_generative_client_dep() -> GenerativeClient:
    """Return the shared generative text client."""
    return get_generative_client()


GenerativeDep = Annotated[GenerativeClient, Depends(get_generative_client_dep)]


def get_moderator(generator: GenerativeDep) -> ContentModerator:
    """Return a content moderator bound to the generative client."""
    return ContentModerator(generator)


ModeratorDep = Annotated[ContentModerator, Depends(get_moderator)]


def get_letter_board(db: SessionDep, moderator: ModeratorDep) -> LetterBoard:
    """Return the letters board for the current request's session."""
    return LetterBoard(LetterRepository(db), moderator)


LetterBoardDep = Annotated[LetterBoard, Depends(get_letter_board)]


def get_assistant(generator: GenerativeDep) -> WellnessAssistant:
    """Return the AI wellness assistant."""
    return WellnessAssistant(generator)


AssistantDep = Annotated[WellnessAssistant, Depends(get_assistant)]


def get_facility_finder() -> FacilityFinder:
    """Return the facility finder."""
    return FacilityFinder()


FacilityFinderDep = Annotated[FacilityFinder, Depends(get_facility_finder)]


def get_wellness_feed() -> WellnessFeedClient:
    """Return the wellness news client."""
    return WellnessFeedClient()


WellnessFeedDep = Annotated[WellnessFeedClient, Depends(get_wellness_feed)]
