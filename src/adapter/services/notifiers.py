"""
Email notifiers

Brevo (HTTP API), SMTP and console delivery, chained by FallbackNotifier.
"""

import asyncio
import logging
import threading
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Optional, Sequence

import aiosmtplib
import httpx

from src.app.services.notifier import EmailMessage, INotifier, NotificationError

logger = logging.getLogger(__name__)

BREVO_API_URL = "https://api.brevo.com/v3/smtp/email"


class BrevoNotifier(INotifier):
    """Brevo transactional email API"""

    name = "brevo"

    def __init__(
        self,
        api_key: str,
        from_address: str,
        from_name: str,
        timeout: float = 10.0,
        api_url: str = BREVO_API_URL,
    ):
        self._api_key = api_key
        self._from_address = from_address
        self._from_name = from_name
        self._timeout = timeout
        self._api_url = api_url
        self._client: Optional[httpx.AsyncClient] = None
        self._client_lock = threading.Lock()

    def _get_client(self) -> httpx.AsyncClient:
        # Created on first send, then reused
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    self._client = httpx.AsyncClient(timeout=self._timeout)
        return self._client

    async def send(self, message: EmailMessage) -> None:
        payload = {
            "sender": {"email": self._from_address, "name": self._from_name},
            "to": [{"email": message.to}],
            "subject": message.subject,
            "textContent": message.text,
        }
        if message.html:
            payload["htmlContent"] = message.html

        headers = {
            "api-key": self._api_key,
            "accept": "application/json",
            "content-type": "application/json",
        }

        try:
            response = await self._get_client().post(
                self._api_url, json=payload, headers=headers
            )
        except httpx.HTTPError as exc:
            raise NotificationError(f"Brevo request failed: {exc}") from exc

        if response.status_code not in (200, 201, 202):
            raise NotificationError(
                f"Brevo rejected email with status {response.status_code}: {response.text[:200]}"
            )
        logger.info("Email sent via Brevo: %s", message.subject)

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


class SmtpNotifier(INotifier):
    """Plain SMTP with STARTTLS"""

    name = "smtp"

    def __init__(
        self,
        host: str,
        port: int,
        username: str,
        password: str,
        from_address: str,
        from_name: str,
        timeout: float = 10.0,
    ):
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._from_address = from_address
        self._from_name = from_name
        self._timeout = timeout

    def _build_mime(self, message: EmailMessage) -> MIMEMultipart:
        mime = MIMEMultipart("alternative")
        mime["From"] = f"{self._from_name} <{self._from_address}>"
        mime["To"] = message.to
        mime["Subject"] = message.subject
        mime.attach(MIMEText(message.text, "plain"))
        if message.html:
            mime.attach(MIMEText(message.html, "html"))
        return mime

    async def send(self, message: EmailMessage) -> None:
        try:
            await aiosmtplib.send(
                self._build_mime(message),
                hostname=self._host,
                port=self._port,
                username=self._username or None,
                password=self._password or None,
                start_tls=True,
                timeout=self._timeout,
            )
        except aiosmtplib.SMTPException as exc:
            raise NotificationError(f"SMTP delivery failed: {exc}") from exc
        logger.info("Email sent via SMTP: %s", message.subject)


class ConsoleNotifier(INotifier):
    """Writes the email to the log instead of sending it"""

    name = "console"

    async def send(self, message: EmailMessage) -> None:
        logger.info(
            "Email (not sent, console delivery)\nTo: %s\nSubject: %s\n\n%s",
            message.to,
            message.subject,
            message.text,
        )


class FallbackNotifier(INotifier):
    """
    Tries each notifier in order until one succeeds.

    Failures of all but the last notifier are logged and skipped; the last
    notifier's failure propagates.
    """

    name = "fallback"

    def __init__(self, notifiers: Sequence[INotifier]):
        if not notifiers:
            raise ValueError("FallbackNotifier needs at least one notifier")
        self.notifiers = list(notifiers)

    async def send(self, message: EmailMessage) -> None:
        *primary, last = self.notifiers
        for notifier in primary:
            try:
                await notifier.send(message)
                return
            except NotificationError as exc:
                logger.warning("Notifier %s failed, trying next: %s", notifier.name, exc)
        await last.send(message)


def build_notifier(config) -> INotifier:
    """Brevo if configured, then SMTP if configured, console always last."""
    notifiers = []
    if config.BREVO_API_KEY:
        notifiers.append(
            BrevoNotifier(
                api_key=config.BREVO_API_KEY,
                from_address=config.EMAIL_FROM_ADDRESS,
                from_name=config.EMAIL_FROM_NAME,
                timeout=config.EMAIL_TIMEOUT_SECONDS,
            )
        )
    if config.SMTP_HOST:
        notifiers.append(
            SmtpNotifier(
                host=config.SMTP_HOST,
                port=config.SMTP_PORT,
                username=config.SMTP_USER,
                password=config.SMTP_PASSWORD,
                from_address=config.EMAIL_FROM_ADDRESS,
                from_name=config.EMAIL_FROM_NAME,
                timeout=config.EMAIL_TIMEOUT_SECONDS,
            )
        )
    notifiers.append(ConsoleNotifier())
    return FallbackNotifier(notifiers)


_notifier: Optional[INotifier] = None
_notifier_lock = threading.Lock()


def get_notifier(config) -> INotifier:
    """Process-wide notifier, built once on first use"""
    global _notifier
    if _notifier is None:
        with _notifier_lock:
            if _notifier is None:
                _notifier = build_notifier(config)
    return _notifier


async def close_notifier() -> None:
    global _notifier
    with _notifier_lock:
        notifier, _notifier = _notifier, None
    if isinstance(notifier, FallbackNotifier):
        await asyncio.gather(
            *(n.aclose() for n in notifier.notifiers if isinstance(n, BrevoNotifier))
        )
