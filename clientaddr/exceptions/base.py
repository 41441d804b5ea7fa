"""
Base exception class for clientaddr.
"""

from enum import IntEnum
from typing import Optional


class ClientAddrError(Exception):
    """
    Base exception for all clientaddr errors.

    Attributes:
        message: Error message
        reason: Reason code (IntEnum specific to the error family)
        metadata: Additional context information
    """

    def __init__(
        self,
        message: str,
        reason: Optional[IntEnum] = None,
        **metadata
    ):
        super().__init__(message)
        self.reason = reason
        self.metadata = metadata

    def __repr__(self):
        parts = [f"{self.__class__.__name__}('{str(self)}')"]
        if self.reason is not None:
            parts.append(f"reason={self.reason.name if hasattr(self.reason, 'name') else self.reason}")
        return f"<{', '.join(parts)}>"
