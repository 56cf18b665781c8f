"""Video metadata routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Response

from tubecache.domain.video.model.record import NormalizedRecord
from tubecache.domain.video.query.get_video import GetVideo, GetVideoHandler

router = APIRouter(prefix="/api", tags=["Videos"], route_class=DishkaRoute)

CACHE_SOURCE_HEADER = "X-Cache"


@router.get(
    "/video2/{videoid}",
    response_model=NormalizedRecord,
    response_model_by_alias=True,
)
async def get_video(
    videoid: str,
    response: Response,
    handler: FromDishka[GetVideoHandler],
) -> NormalizedRecord:
    lookup = await handler.run(GetVideo(video_id=videoid))
    response.headers[CACHE_SOURCE_HEADER] = lookup.source.value
    return lookup.record
