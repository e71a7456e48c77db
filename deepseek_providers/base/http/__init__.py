"""HTTP layer: pooled ``httpx`` clients and the request transport."""

from .client import close_all_clients, get_httpx_client
from .transport import build_headers, build_url, get_json, stream_post

__all__ = [
    "close_all_clients",
    "get_httpx_client",
    "build_headers",
    "build_url",
    "get_json",
    "stream_post",
]
