from abc import ABC, abstractmethod
from typing import Optional


class IRateLimitRepository(ABC):
    """RateLimitCounter repository interface - application layer"""

    @abstractmethod
    async def hit(self, key: str, window_start: int, limit: int) -> Optional[int]:
        """
        Atomically count one request for key in the given window.

        Returns the new count when the request is admitted, or None when
        the window is already at the limit.
        """
        pass
