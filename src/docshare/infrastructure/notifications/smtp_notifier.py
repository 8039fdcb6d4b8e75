"""E-mail delivery of verification codes."""

import asyncio
import html
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

from docshare.domain.exceptions import NotificationError

logger = logging.getLogger(__name__)

SUBJECT = "Email Verification OTP"


def build_otp_message(
    sender: str, recipient: str, name: str, code: str, ttl_minutes: int
) -> MIMEMultipart:
    msg = MIMEMultipart("alternative")
    msg["Subject"] = SUBJECT
    msg["From"] = sender
    msg["To"] = recipient

    text_body = f"""Hello {name},

Your verification code is: {code}

This code expires in {ttl_minutes} minutes.
If you did not request this, please ignore this email.
"""
    html_body = f"""<html>
<body>
<h2>Email Verification</h2>
<p>Hello {html.escape(name)},</p>
<p>Your verification code is:</p>
<h1 style="letter-spacing: 4px">{code}</h1>
<p>This code expires in {ttl_minutes} minutes.</p>
<p>If you did not request this, please ignore this email.</p>
</body>
</html>
"""
    msg.attach(MIMEText(text_body, "plain"))
    msg.attach(MIMEText(html_body, "html"))
    return msg


class SmtpNotifier:
    """Sends codes over SMTP. The blocking client runs in a worker thread."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        *,
        username: str = "",
        password: str = "",
        sender: str = "no-reply@docshare.local",
        use_tls: bool = True,
        timeout: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._username = username
        self._password = password
        self._sender = sender
        self._use_tls = use_tls
        self._timeout = timeout

    def _send(self, msg: MIMEMultipart) -> None:
        with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as server:
            if self._use_tls:
                server.starttls()
            if self._username:
                server.login(self._username, self._password)
            server.send_message(msg)

    async def send_otp(self, email: str, name: str, code: str, ttl_minutes: int) -> None:
        msg = build_otp_message(self._sender, email, name, code, ttl_minutes)
        try:
            await asyncio.to_thread(self._send, msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send OTP email to %s: %s", email, e)
            raise NotificationError() from e
        logger.info("OTP email sent to %s", email)


class ConsoleNotifier:
    """Development notifier: writes the code to the log instead of mailing it."""

    async def send_otp(self, email: str, name: str, code: str, ttl_minutes: int) -> None:
        logger.warning(
            "[EMAIL] (no SMTP configured) OTP for %s <%s>: %s (valid %d min)",
            name,
            email,
            code,
            ttl_minutes,
        )
