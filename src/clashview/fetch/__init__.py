from .fetcher import ConfigFetcher, FetchError, HTTPStatusError, InvalidURLError

__all__ = [
    "ConfigFetcher",
    "FetchError",
    "HTTPStatusError",
    "InvalidURLError",
]
