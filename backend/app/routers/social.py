import uuid

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.orm import Session

from app import models
from app.core.exceptions import (
    raise_bad_request,
    raise_conflict,
    raise_internal_error,
    raise_not_found,
)
from app.core.rate_limit import RATE_LIMITS, limiter
from app.db import get_db
from app.routers.auth import get_current_user
from app.schemas import (
    ActivityItem,
    FriendRequestAnswer,
    FriendRequestCreate,
    FriendRequestRead,
    FriendshipRead,
    Profile,
    SocialOverview,
)
from app.services import social_service
from app.services.social_service import WriteResult

router = APIRouter(prefix="/api/social", tags=["social"])


def _raise_for_write(result: WriteResult, operation: str) -> None:
    if result.ok:
        return
    if result.conflict:
        raise_conflict(result.error)
    if result.not_found:
        raise_not_found("Friend request", message=result.error)
    raise_internal_error(operation)


@router.get("/search", response_model=list[Profile])
@limiter.limit(RATE_LIMITS["user_search"])
def search_users(
    request: Request,
    q: str = Query("", max_length=100),
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
) -> list[Profile]:
    """Users matching ``q`` that are not yet connected to the caller."""
    return social_service.search_users(db, q, current_user.id)


@router.post("/requests", response_model=FriendshipRead, status_code=status.HTTP_201_CREATED)
@limiter.limit(RATE_LIMITS["social_write"])
def send_friend_request(
    request: Request,
    payload: FriendRequestCreate,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
) -> FriendshipRead:
    if payload.target_id == current_user.id:
        raise_bad_request("You cannot send a friend request to yourself", field="target_id")
    if db.get(models.User, payload.target_id) is None:
        raise_not_found("User", payload.target_id)

    result = social_service.send_friend_request(db, current_user.id, payload.target_id)
    _raise_for_write(result, "send friend request")
    return FriendshipRead.model_validate(result.friendship)


@router.get("/requests", response_model=list[FriendRequestRead])
def list_friend_requests(
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
) -> list[FriendRequestRead]:
    return social_service.get_friend_requests(db, current_user.id)


@router.post("/requests/{request_id}/respond")
@limiter.limit(RATE_LIMITS["social_write"])
def respond_to_friend_request(
    request: Request,
    request_id: uuid.UUID,
    payload: FriendRequestAnswer,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    """Only the recipient of a request may answer it."""
    friendship = db.get(models.Friendship, request_id)
    if friendship is None or friendship.friend_id != current_user.id:
        raise_not_found("Friend request", request_id)

    result = social_service.respond_to_friend_request(db, request_id, payload.accept)
    _raise_for_write(result, "answer friend request")
    return {"detail": "Friend request accepted" if payload.accept else "Friend request rejected"}


@router.get("/friends", response_model=list[Profile])
def list_friends(
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
) -> list[Profile]:
    return social_service.get_friends(db, current_user.id)


@router.delete("/friends/{friend_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_friend(
    friend_id: uuid.UUID,
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
):
    result = social_service.remove_friend(db, current_user.id, friend_id)
    _raise_for_write(result, "remove friend")
    return None


@router.get("/activity", response_model=list[ActivityItem])
def friends_activity(
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
) -> list[ActivityItem]:
    return social_service.get_friends_activity(db, current_user.id)


@router.get("/overview", response_model=SocialOverview)
def social_overview(
    db: Session = Depends(get_db),
    current_user: models.User = Depends(get_current_user),
) -> SocialOverview:
    """Friends and incoming requests in one round trip for the social page."""
    friends = social_service.get_friends(db, current_user.id)
    requests = social_service.get_friend_requests(db, current_user.id)
    return SocialOverview(friends=friends, requests=requests)
