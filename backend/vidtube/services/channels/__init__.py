from vidtube.services.channels.dto import ChannelProfileOut, VideoOwnerOut, WatchHistoryItemOut
from vidtube.services.channels.service import ChannelService

__all__ = ["ChannelProfileOut", "ChannelService", "VideoOwnerOut", "WatchHistoryItemOut"]
