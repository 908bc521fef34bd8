"""Recommendation endpoints."""

import asyncio
import json
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response, status

from app.api.sse import format_comment, format_sse, stream
from app.api.v1.dependencies import (
    get_change_feed,
    get_identity,
    get_recommendation_service,
)
from app.config import settings
from app.schemas.identity import VerifiedIdentity
from app.schemas.recommendation import (
    FeaturedToggleResponse,
    RecommendationCreate,
    RecommendationCreated,
    RecommendationPage,
    RecommendationResponse,
)
from app.services.change_feed import ChangeEvent, ChangeFeed
from app.services.exceptions import (
    AuthenticationError,
    ForbiddenError,
    InvalidCursorError,
    RecommendationNotFoundError,
    UserNotSyncedError,
    ValidationFailedError,
)
from app.services.pagination import Page
from app.services.recommendation_service import RecommendationService

router = APIRouter()


def _unauthenticated(e: AuthenticationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=e.message,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _to_page(page: Page) -> RecommendationPage:
    return RecommendationPage(
        items=[RecommendationResponse.model_validate(rec) for rec in page.items],
        cursor=page.cursor,
        is_done=page.is_done,
    )


@router.get(
    "/latest",
    response_model=list[RecommendationResponse],
    summary="Latest recommendations",
    description="Public, read-only feed of the most recent recommendations, newest first.",
)
def list_latest(
    recommendation_service: RecommendationService = Depends(get_recommendation_service),
) -> list[RecommendationResponse]:
    """List the latest recommendations."""
    recommendations = recommendation_service.list_latest(limit=settings.LATEST_FEED_LIMIT)
    return [RecommendationResponse.model_validate(rec) for rec in recommendations]


@router.get(
    "",
    response_model=RecommendationPage,
    summary="Browse the shelf",
    description="""
    Cursor-paginated listing of all recommendations, newest first.

    Pass `genre` to restrict to one registry genre. Pass the `cursor` from
    the previous page to continue; omit it to start over. A cursor is only
    valid for the same `genre` filter it was issued under.
    """,
)
def list_recommendations(
    genre: Optional[str] = Query(default=None, description="Filter by genre value"),
    cursor: Optional[str] = Query(default=None, description="Cursor from the previous page"),
    num_items: Optional[int] = Query(
        default=None, ge=1, le=settings.MAX_PAGE_SIZE, description="Page size"
    ),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
    recommendation_service: RecommendationService = Depends(get_recommendation_service),
) -> RecommendationPage:
    """List recommendations page by page."""
    try:
        page = recommendation_service.list_paged(
            identity,
            genre=genre,
            cursor=cursor,
            num_items=num_items or settings.DEFAULT_PAGE_SIZE,
        )
        return _to_page(page)

    except AuthenticationError as e:
        raise _unauthenticated(e)
    except (ValidationFailedError, InvalidCursorError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        )


@router.get(
    "/mine",
    response_model=RecommendationPage,
    summary="My recommendations",
    description="Cursor-paginated listing of the caller's own recommendations.",
)
def list_my_recommendations(
    cursor: Optional[str] = Query(default=None, description="Cursor from the previous page"),
    num_items: Optional[int] = Query(
        default=None, ge=1, le=settings.MAX_PAGE_SIZE, description="Page size"
    ),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
    recommendation_service: RecommendationService = Depends(get_recommendation_service),
) -> RecommendationPage:
    """List the caller's recommendations."""
    try:
        page = recommendation_service.list_by_owner(
            identity,
            cursor=cursor,
            num_items=num_items or settings.DEFAULT_PAGE_SIZE,
        )
        return _to_page(page)

    except AuthenticationError as e:
        raise _unauthenticated(e)
    except UserNotSyncedError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=e.message,
        )
    except InvalidCursorError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        )


@router.get(
    "/featured",
    response_model=RecommendationPage,
    summary="Staff picks",
    description="Cursor-paginated listing of featured recommendations.",
)
def list_featured_recommendations(
    cursor: Optional[str] = Query(default=None, description="Cursor from the previous page"),
    num_items: Optional[int] = Query(
        default=None, ge=1, le=settings.MAX_PAGE_SIZE, description="Page size"
    ),
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
    recommendation_service: RecommendationService = Depends(get_recommendation_service),
) -> RecommendationPage:
    """List staff picks."""
    try:
        page = recommendation_service.list_featured(
            identity,
            cursor=cursor,
            num_items=num_items or settings.DEFAULT_PAGE_SIZE,
        )
        return _to_page(page)

    except AuthenticationError as e:
        raise _unauthenticated(e)
    except InvalidCursorError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        )


@router.get(
    "/changes",
    summary="Change stream",
    description="""
    Server-sent events announcing committed changes.

    Emits a `ready` event carrying the current version, then one `change`
    event per mutation. Clients re-run their reads when a change arrives.
    """,
)
async def stream_changes(
    request: Request,
    feed: ChangeFeed = Depends(get_change_feed),
):
    """Stream change notifications."""
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue[ChangeEvent] = asyncio.Queue()
    unsubscribe = feed.subscribe(lambda event: loop.call_soon_threadsafe(queue.put_nowait, event))

    async def events():
        try:
            yield format_sse(json.dumps({"version": feed.version}), event="ready")
            while not await request.is_disconnected():
                try:
                    event = await asyncio.wait_for(
                        queue.get(), timeout=settings.CHANGE_STREAM_KEEPALIVE_SECONDS
                    )
                except asyncio.TimeoutError:
                    yield format_comment("keep-alive")
                    continue
                yield format_sse(json.dumps(event.to_dict()), event="change")
        finally:
            unsubscribe()

    return stream(events())


@router.post(
    "",
    response_model=RecommendationCreated,
    status_code=status.HTTP_201_CREATED,
    summary="Add a recommendation",
    description="""
    Add a recommendation owned by the caller.

    The server validates every field: title (1-120 characters), genre
    (registry value), link (http or https URL) and blurb (1-300 characters).
    The caller must have synced their user record first.
    """,
)
def add_recommendation(
    data: RecommendationCreate,
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
    recommendation_service: RecommendationService = Depends(get_recommendation_service),
) -> RecommendationCreated:
    """Add a recommendation."""
    try:
        recommendation = recommendation_service.add(identity, data)
        return RecommendationCreated.model_validate(recommendation)

    except AuthenticationError as e:
        raise _unauthenticated(e)
    except ValidationFailedError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message,
        )
    except UserNotSyncedError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=e.message,
        )


@router.delete(
    "/{recommendation_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a recommendation",
    description="Owners may delete their own recommendations; admins may delete any.",
)
def remove_recommendation(
    recommendation_id: UUID,
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
    recommendation_service: RecommendationService = Depends(get_recommendation_service),
) -> Response:
    """Delete a recommendation."""
    try:
        recommendation_service.remove(identity, recommendation_id)
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    except AuthenticationError as e:
        raise _unauthenticated(e)
    except UserNotSyncedError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=e.message,
        )
    except RecommendationNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Recommendation {recommendation_id} not found",
        )
    except ForbiddenError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=e.message,
        )


@router.post(
    "/{recommendation_id}/featured",
    response_model=FeaturedToggleResponse,
    summary="Toggle staff pick",
    description="Flip the staff pick flag on a recommendation. Admin only.",
)
def toggle_featured(
    recommendation_id: UUID,
    identity: Optional[VerifiedIdentity] = Depends(get_identity),
    recommendation_service: RecommendationService = Depends(get_recommendation_service),
) -> FeaturedToggleResponse:
    """Toggle the staff pick flag."""
    try:
        recommendation = recommendation_service.toggle_featured(identity, recommendation_id)
        return FeaturedToggleResponse.model_validate(recommendation)

    except AuthenticationError as e:
        raise _unauthenticated(e)
    except ForbiddenError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=e.message,
        )
    except RecommendationNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Recommendation {recommendation_id} not found",
        )
