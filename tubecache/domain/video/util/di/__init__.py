from .provider import VideoProvider

__all__ = ["VideoProvider"]
