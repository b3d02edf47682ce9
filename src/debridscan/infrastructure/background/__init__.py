from .httpx_client import HttpxBackgroundClient

__all__ = ["HttpxBackgroundClient"]
