import config

from .base import ClientStore, validate_client_id
from .errors import IntakeError, NotFoundError, StorageError, ValidationError
from .file_store import FileStore
from .http_store import HttpStore
from .memory import MemoryStore
from .sql_store import SqlStore


def get_store(backend=None, **overrides) -> ClientStore:
    """Build the backend named by STORE_BACKEND (or `backend`)."""
    backend = (backend or config.STORE_BACKEND).lower()
    if backend == "memory":
        return MemoryStore()
    if backend == "file":
        return FileStore(overrides.get("data_dir", config.DATA_DIR))
    if backend == "sqlite":
        return SqlStore(db_path=overrides.get("db_path", config.DB_PATH), url=overrides.get("url"))
    if backend == "http":
        return HttpStore(
            overrides.get("base_url", config.API_URL),
            timeout=overrides.get("timeout", config.HTTP_TIMEOUT),
            session=overrides.get("session"),
        )
    raise ValueError(f"Unknown STORE_BACKEND: {backend}")


__all__ = [
    'ClientStore', 'FileStore', 'HttpStore', 'MemoryStore', 'SqlStore', 'get_store',
    'validate_client_id', 'IntakeError', 'NotFoundError', 'StorageError', 'ValidationError',
]
