"""Small support utilities shared across iCrop."""

from .console_logger import ensure_console_logger
from .signal import Signal

__all__ = ["Signal", "ensure_console_logger"]
