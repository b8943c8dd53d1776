from abc import ABC, abstractmethod


class IEmailSender(ABC):
    """Outbound email capability - application layer"""

    @abstractmethod
    async def send(self, to: str, subject: str, html: str) -> None:
        """Deliver one message; raises on delivery failure"""
        pass
