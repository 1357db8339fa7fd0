"""
Thin client for The Movie Database (TMDB), the content metadata provider.

Only the two lookups the watch logger needs are wrapped: multi search and
details by id. Responses are returned as decoded JSON; ``content_from_details``
maps a details payload onto :class:`ContentCreate`.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx

from app.core.exceptions import MetadataProviderError
from app.core.logging import get_logger
from app.core.settings import settings
from app.schemas import ContentCreate, ContentType

logger = get_logger(__name__)

SUPPORTED_MEDIA_TYPES = {ContentType.MOVIE.value, ContentType.TV.value}


class TmdbClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        language: str | None = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.tmdb_api_key
        self.language = language or settings.tmdb_language
        self._client = httpx.Client(
            base_url=base_url or settings.tmdb_base_url,
            timeout=settings.tmdb_timeout_seconds,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> "TmdbClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _get(self, path: str, **params: Any) -> dict:
        params.update({"api_key": self.api_key, "language": self.language})
        try:
            res = self._client.get(path, params=params)
        except httpx.HTTPError as exc:
            logger.error("tmdb_request_failed", path=path, error=str(exc))
            raise MetadataProviderError("TMDB request failed", {"path": path}) from exc
        if res.status_code != 200:
            logger.warning("tmdb_bad_status", path=path, status_code=res.status_code)
            raise MetadataProviderError(
                f"TMDB answered {res.status_code}", {"path": path, "status_code": res.status_code}
            )
        return res.json()

    def search_multi(self, query: str) -> list[dict]:
        """Search movies and shows; people and other media types are dropped."""
        data = self._get("/search/multi", query=query)
        return [
            item
            for item in data.get("results") or []
            if item.get("media_type") in SUPPORTED_MEDIA_TYPES
        ]

    def get_details(self, tmdb_id: int, media_type: str) -> dict:
        if media_type not in SUPPORTED_MEDIA_TYPES:
            raise MetadataProviderError(f"Unsupported media type '{media_type}'")
        return self._get(f"/{media_type}/{tmdb_id}")


def _year(details: dict) -> Optional[int]:
    date = details.get("release_date") or details.get("first_air_date") or ""
    try:
        return int(date[:4]) or None
    except ValueError:
        return None


def _runtime(details: dict) -> int:
    if details.get("runtime"):
        return int(details["runtime"])
    episode_run_time = details.get("episode_run_time") or []
    return int(episode_run_time[0]) if episode_run_time else 0


def content_from_details(details: dict, media_type: str) -> ContentCreate:
    return ContentCreate(
        tmdb_id=details["id"],
        title=details.get("title") or details.get("name") or "",
        type=ContentType(media_type),
        genre=", ".join(g["name"] for g in details.get("genres") or [] if g.get("name")),
        year=_year(details),
        runtime=_runtime(details),
        poster_path=details.get("poster_path"),
    )


def get_tmdb_client():
    """FastAPI dependency yielding a client that is closed after the request."""
    client = TmdbClient()
    try:
        yield client
    finally:
        client.close()
