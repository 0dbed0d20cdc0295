from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class StreamConfigIn(BaseModel):
    # Blank strings are stored as null
    youtube_channel_id: Optional[str] = None
    youtube_video_id: Optional[str] = None


class StreamConfigOut(BaseModel):
    id: int
    youtube_channel_id: Optional[str] = None
    youtube_video_id: Optional[str] = None
    is_active: bool
    updated_at: Optional[datetime] = None
    updated_by: Optional[int] = None

    class Config:
        from_attributes = True


class AdminStreamConfigOut(BaseModel):
    config: Optional[StreamConfigOut] = None
    embed_url: str


class StreamConfigSaved(BaseModel):
    message: str
    created: bool
    config: StreamConfigOut
    embed_url: str


class StreamInfo(BaseModel):
    title: str
    embed_url: str
    watch_url: str
