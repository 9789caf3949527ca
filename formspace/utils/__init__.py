from .id_generator import generate_id, generate_session_id
from .logging import get_logger, setup_logging
from .time_utils import get_timestamp_ms

__all__ = [
    "generate_id",
    "generate_session_id",
    "get_logger",
    "setup_logging",
    "get_timestamp_ms",
]
