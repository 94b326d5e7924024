from .async_client import AsyncGetImgClient

__all__ = ['AsyncGetImgClient']
