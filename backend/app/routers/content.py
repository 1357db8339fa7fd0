from app import models
from app.core.exceptions import MetadataProviderError, raise_bad_gateway
from app.core.rate_limit import RATE_LIMITS, limiter
from app.routers.auth import get_current_user
from app.schemas import ContentCreate, ContentType
from app.services.tmdb_client import TmdbClient, content_from_details, get_tmdb_client
from fastapi import APIRouter, Depends, Query, Request
from pydantic import ValidationError

router = APIRouter(prefix="/api/content", tags=["content"])


@router.get("/search")
@limiter.limit(RATE_LIMITS["metadata_lookup"])
def search_content(
    request: Request,
    q: str = Query(..., min_length=1, max_length=200),
    tmdb: TmdbClient = Depends(get_tmdb_client),
    current_user: models.User = Depends(get_current_user),
) -> list[dict]:
    """Movies and shows from TMDB matching ``q`` (raw TMDB result items)."""
    try:
        return tmdb.search_multi(q)
    except MetadataProviderError as exc:
        raise_bad_gateway("TMDB", exc)


@router.get("/{media_type}/{tmdb_id}", response_model=ContentCreate)
@limiter.limit(RATE_LIMITS["metadata_lookup"])
def content_details(
    request: Request,
    media_type: ContentType,
    tmdb_id: int,
    tmdb: TmdbClient = Depends(get_tmdb_client),
    current_user: models.User = Depends(get_current_user),
) -> ContentCreate:
    """Details mapped to the shape expected by ``POST /api/watch-logs``."""
    try:
        details = tmdb.get_details(tmdb_id, media_type.value)
        return content_from_details(details, media_type.value)
    except (MetadataProviderError, ValidationError, KeyError) as exc:
        raise_bad_gateway("TMDB", exc)
