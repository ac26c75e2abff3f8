from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class EmailMessage(BaseModel):
    """Outgoing email, transport agnostic"""

    to: str
    subject: str
    text: str
    html: Optional[str] = None


class NotificationError(Exception):
    """Raised by a notifier that could not deliver a message"""


class INotifier(ABC):
    """Delivery capability - application layer"""

    name: str = "notifier"

    @abstractmethod
    async def send(self, message: EmailMessage) -> None:
        """Deliver a message or raise NotificationError"""
        pass
