from typing import Optional

from stream_attendance.models.stream_config import StreamConfig

YOUTUBE_EMBED_BASE = "https://www.youtube.com/embed"


def channel_embed_url(channel_id: str) -> str:
    return f"{YOUTUBE_EMBED_BASE}/live_stream?channel={channel_id}&autoplay=0"


def video_embed_url(video_id: str) -> str:
    return f"{YOUTUBE_EMBED_BASE}/{video_id}?autoplay=0"


def build_embed_url(config: Optional[StreamConfig], default_channel_id: str) -> str:
    """Player URL for the active config.

    A video id always wins over a channel id. With no config row, or a row
    holding neither id, the default channel's live stream is used.
    """
    if config is not None:
        if config.youtube_video_id:
            return video_embed_url(config.youtube_video_id)
        if config.youtube_channel_id:
            return channel_embed_url(config.youtube_channel_id)
    return channel_embed_url(default_channel_id)


def build_watch_url(config: Optional[StreamConfig], default_channel_id: str) -> str:
    """Link to the channel's live page, for viewers whose player fails to load"""
    channel_id = default_channel_id
    if config is not None and config.youtube_channel_id:
        channel_id = config.youtube_channel_id
    return f"https://www.youtube.com/channel/{channel_id}/live"
