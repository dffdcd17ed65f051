import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Set

logger = logging.getLogger(__name__)


class IMailDispatcher(ABC):
    """Outbound mail transport - application layer"""

    @abstractmethod
    async def send(self, to: str, subject: str, html_body: str) -> bool:
        """Deliver one HTML message, True on success"""
        pass


class MailOutbox:
    """
    Fire-and-forget mail submission.

    submit() returns immediately; delivery runs on a background task.
    Delivery failures are logged and never reach the caller.
    """

    def __init__(self, dispatcher: IMailDispatcher):
        self.dispatcher = dispatcher
        self._pending: Set[asyncio.Task] = set()

    def submit(self, to: str, subject: str, html_body: str) -> None:
        task = asyncio.create_task(self._deliver(to, subject, html_body))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def drain(self) -> None:
        """Wait for every submitted message to finish (shutdown, tests)"""
        if self._pending:
            await asyncio.gather(*list(self._pending))

    async def _deliver(self, to: str, subject: str, html_body: str) -> None:
        try:
            delivered = await self.dispatcher.send(to, subject, html_body)
        except Exception:
            logger.exception(f"Error sending email '{subject}' to {to}")
            return

        if delivered:
            logger.info(f"Email '{subject}' sent to {to}")
        else:
            logger.warning(f"Email '{subject}' to {to} was not delivered")
