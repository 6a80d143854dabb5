"""Wellness news feed endpoint."""

from fastapi import APIRouter

from mindwell.api.v1.dependencies import WellnessFeedDep, http_error
from mindwell.core.errors import MindWellError
from mindwell.schemas.feed import WellnessFeedResponse

router = APIRouter(prefix="/wellness-feed", tags=["wellness-feed"])


@router.get("", response_model=WellnessFeedResponse)
async def wellness_feed(feed: WellnessFeedDep) -> WellnessFeedResponse:
    """Return recent mental-health articles."""
    try:
        articles = await feed.fetch()
    except MindWellError as exc:
        raise http_error(exc) from exc
    return WellnessFeedResponse(articles=articles)
