from .connection import build_async_engine, build_session_factory, mask_database_url

__all__ = [
    "build_async_engine",
    "build_session_factory",
    "mask_database_url",
]
