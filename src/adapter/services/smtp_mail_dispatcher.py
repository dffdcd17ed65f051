import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from src.app.services.mail_dispatcher import IMailDispatcher

logger = logging.getLogger(__name__)


class SmtpMailDispatcher(IMailDispatcher):
    """SMTP implementation of the mail dispatcher"""

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        sender: str,
        use_tls: bool = True,
        timeout: float = 10,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.use_tls = use_tls
        self.timeout = timeout

        if not self.host:
            logger.warning("SMTP_HOST not configured. Outgoing mail will not be delivered.")

    async def send(self, to: str, subject: str, html_body: str) -> bool:
        if not self.host:
            logger.warning(f"SMTP_HOST not configured, dropping email '{subject}' to {to}")
            return False
        return await asyncio.to_thread(self._send_sync, to, subject, html_body)

    def _send_sync(self, to: str, subject: str, html_body: str) -> bool:
        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.sender
        msg["To"] = to
        msg.attach(MIMEText(html_body, "html", "utf-8"))

        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            if self.username:
                server.login(self.username, self.password)
            server.send_message(msg, to_addrs=[to])

        return True
