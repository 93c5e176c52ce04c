from fastapi import APIRouter, Depends, Query

from api.dependencies import current_user_id, limit_writes, verify_gateway_secret
from api.schemas import (
    MessageOut,
    WatchlistCheckOut,
    WatchlistCreate,
    WatchlistEntryOut,
    WatchlistItemOut,
    WatchlistStatsOut,
)
from core.database import get_db
from models.watchlist import WatchlistType
from services.watchlist import WatchlistService

router = APIRouter(
    prefix="/watchlist",
    tags=["watchlist"],
    dependencies=[Depends(verify_gateway_secret)],
)


@router.post("", response_model=WatchlistEntryOut, status_code=201, dependencies=[Depends(limit_writes)])
async def add_to_watchlist(body: WatchlistCreate, user_id: int = Depends(current_user_id)):
    async with get_db() as db:
        result = await WatchlistService(db).add(
            user_id=user_id, movie_id=body.movie_id, type=body.type
        )
    return WatchlistEntryOut.model_validate(result.unwrap())


@router.delete("/{entry_id}", response_model=MessageOut, dependencies=[Depends(limit_writes)])
async def remove_from_watchlist(entry_id: int, user_id: int = Depends(current_user_id)):
    async with get_db() as db:
        result = await WatchlistService(db).remove(user_id=user_id, entry_id=entry_id)
    result.unwrap()
    return MessageOut(message="Item removed from watchlist successfully")


@router.get("", response_model=list[WatchlistItemOut])
async def get_watchlist(
    type: WatchlistType | None = Query(None),
    user_id: int = Depends(current_user_id),
):
    async with get_db() as db:
        entries = await WatchlistService(db).list_for_user(user_id, type)
    return [WatchlistItemOut.model_validate(e) for e in entries]


@router.get("/stats", response_model=WatchlistStatsOut)
async def get_watchlist_stats(user_id: int = Depends(current_user_id)):
    async with get_db() as db:
        stats = await WatchlistService(db).stats(user_id)
    return WatchlistStatsOut(**stats)


@router.get("/movie/{movie_id}/check", response_model=WatchlistCheckOut)
async def check_movie(
    movie_id: int,
    type: WatchlistType | None = Query(None),
    user_id: int = Depends(current_user_id),
):
    async with get_db() as db:
        found = await WatchlistService(db).is_in_list(user_id, movie_id, type)
    return WatchlistCheckOut(is_in_watchlist=found)
