from app import models
from app.db import get_db
from app.routers.auth import get_current_user
from app.schemas import UserStats
from app.services import stats_service, watch_log_service
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

router = APIRouter(prefix="/api/me", tags=["me"])


@router.get("/stats", response_model=UserStats)
def get_stats(
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
) -> UserStats:
    """Dashboard aggregates over the caller's whole watch history."""
    entries = watch_log_service.list_history(db, current_user.id)
    return stats_service.build_user_stats(entries)
