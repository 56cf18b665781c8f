from tubecache.domain.shared.query import Query, QueryHandler
from tubecache.domain.video.model.value import VideoLookup
from tubecache.domain.video.service.video import VideoService


class GetVideo(Query):
    video_id: str


class GetVideoHandler(QueryHandler[GetVideo, VideoLookup]):
    video_service: VideoService

    async def run(self, cmd: GetVideo) -> VideoLookup:
        return await self.video_service.get_video(cmd.video_id)
