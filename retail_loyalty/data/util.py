from __future__ import annotations

from typing import Optional

from ..config import get_config
from ..logging import get_logger
from .backends.csv_backend import CsvDataAccess
from .errors import DataAccessError
from .interface import DataAccess

BACKENDS = ("csv",)


def get_data_access(kind: Optional[str] = None) -> DataAccess:
    """Build the storage backend named by ``kind``, or by ``config.data_backend``.

    Raises:
        ValueError: ``kind`` names no known backend.
        DataAccessError: the configured data directory exists but is not a directory.
    """
    config = get_config()
    kind = (kind or config.data_backend).lower()
    if kind not in BACKENDS:
        raise ValueError(f"Unknown data access kind: {kind} (expected one of {', '.join(BACKENDS)})")

    da = CsvDataAccess(data_dir=config.data_dir)
    if da.data_dir.exists() and not da.data_dir.is_dir():
        raise DataAccessError(f"Data directory {da.data_dir} is not a directory")
    get_logger(__name__).info(f"Using {kind} storage under {da.data_dir}")
    return da
