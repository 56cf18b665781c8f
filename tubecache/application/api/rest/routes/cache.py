"""Cache inspection routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from tubecache.domain.video.model.value import CacheStats
from tubecache.domain.video.query.get_cache_stats import GetCacheStats, GetCacheStatsHandler

router = APIRouter(prefix="/api/cache", tags=["Cache"], route_class=DishkaRoute)


@router.get("/stats", response_model=CacheStats)
async def get_cache_stats(
    handler: FromDishka[GetCacheStatsHandler],
) -> CacheStats:
    return await handler.run(GetCacheStats())
