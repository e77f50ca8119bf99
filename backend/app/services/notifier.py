"""이메일 알림 어댑터 (Resend)

send()는 예외를 던지지 않고 성공 여부(bool)만 반환한다.
RESEND_API_KEY가 없으면 개발 모드로 간주해 로그만 남기고 성공 처리한다.
"""

import asyncio
import logging
from typing import Protocol

import resend

from app.core.config import get_settings
from app.core.telemetry import record_counter

logger = logging.getLogger(__name__)


class Notifier(Protocol):
    """알림 계약"""

    async def send(self, to: str, subject: str, html: str, text: str) -> bool:
        ...


class EmailNotifier:
    """Resend 기반 이메일 발송"""

    def __init__(self, api_key: str | None = None):
        self.settings = get_settings()
        self.api_key = api_key if api_key is not None else self.settings.resend_api_key

    async def send(self, to: str, subject: str, html: str, text: str) -> bool:
        """이메일 1건 발송 (실패 시 False)"""
        if not self.api_key:
            logger.info(
                "[Notifier] (dev) From=%s To=%s Subject=%s Text=%s",
                self.settings.mail_from,
                to,
                subject,
                text[:400],
            )
            record_counter("notifications", attributes={"result": "sent"})
            return True

        params = {
            "from": self.settings.mail_from,
            "to": [to],
            "subject": subject,
            "html": html,
            "text": text,
        }

        try:
            resend.api_key = self.api_key
            # resend SDK는 동기 호출이므로 스레드에서 실행
            response = await asyncio.wait_for(
                asyncio.to_thread(resend.Emails.send, params),
                timeout=self.settings.email_timeout_seconds,
            )
        except asyncio.TimeoutError:
            logger.warning("[Notifier] Email to %s timed out", to)
            record_counter("notifications", attributes={"result": "failed"})
            return False
        except Exception as e:
            logger.warning("[Notifier] Email to %s failed: %s", to, e)
            record_counter("notifications", attributes={"result": "failed"})
            return False

        logger.info("[Notifier] Email sent to %s: %s", to, response.get("id") if response else None)
        record_counter("notifications", attributes={"result": "sent"})
        return True
