from app import models
from app.core.exceptions import raise_bad_request, raise_not_found
from app.db import get_db
from app.routers.auth import get_current_user
from app.schemas import PlatformRead, WatchLogCreate, WatchLogRead, WatchLogUpdate
from app.services import watch_log_service
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

router = APIRouter(prefix="/api", tags=["watch_logs"])


def _check_platform(db: Session, platform_id: str | None) -> None:
    if platform_id is not None and db.get(models.Platform, platform_id) is None:
        raise_bad_request(f"Unknown platform '{platform_id}'", field="platform_id")


@router.get("/platforms", response_model=list[PlatformRead])
def list_platforms(db: Session = Depends(get_db)) -> list[PlatformRead]:
    return [PlatformRead.model_validate(p) for p in watch_log_service.list_platforms(db)]


@router.post("/watch-logs", response_model=WatchLogRead, status_code=status.HTTP_201_CREATED)
def create_watch_log(
    payload: WatchLogCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
) -> WatchLogRead:
    _check_platform(db, payload.platform_id)
    entry = watch_log_service.log_watch(db, current_user.id, payload)
    return WatchLogRead.model_validate(entry)


@router.get("/watch-logs", response_model=list[WatchLogRead])
def list_watch_logs(
    q: str | None = Query(None, max_length=100),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
) -> list[WatchLogRead]:
    entries = watch_log_service.list_history(db, current_user.id, query=q)
    return [WatchLogRead.model_validate(e) for e in entries]


@router.patch("/watch-logs/{entry_id}", response_model=WatchLogRead)
def update_watch_log(
    entry_id: int,
    payload: WatchLogUpdate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
) -> WatchLogRead:
    _check_platform(db, payload.platform_id)
    entry = watch_log_service.update_entry(db, current_user.id, entry_id, payload)
    if entry is None:
        raise_not_found("Watch log entry", entry_id)
    return WatchLogRead.model_validate(entry)


@router.delete("/watch-logs/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_watch_log(
    entry_id: int,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    if not watch_log_service.delete_entry(db, current_user.id, entry_id):
        raise_not_found("Watch log entry", entry_id)
    return None
