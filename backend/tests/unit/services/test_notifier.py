"""이메일 알림 어댑터 테스트 (resend SDK는 patch)"""

import time
from unittest.mock import patch

from app.services.notifier import EmailNotifier


async def test_send_without_api_key_is_dev_mode():
    """API 키가 없으면 로그만 남기고 성공 처리"""
    notifier = EmailNotifier(api_key="")

    with patch("app.services.notifier.resend.Emails.send") as mock_send:
        sent = await notifier.send("a@x.com", "Subject", "<p>hi</p>", "hi")

    assert sent is True
    mock_send.assert_not_called()


async def test_send_success():
    notifier = EmailNotifier(api_key="re_test")

    with patch(
        "app.services.notifier.resend.Emails.send", return_value={"id": "email-1"}
    ) as mock_send:
        sent = await notifier.send("a@x.com", "Subject", "<p>hi</p>", "hi")

    assert sent is True
    params = mock_send.call_args.args[0]
    assert params["to"] == ["a@x.com"]
    assert params["subject"] == "Subject"
    assert params["html"] == "<p>hi</p>"
    assert params["text"] == "hi"
    assert params["from"] == notifier.settings.mail_from


async def test_send_failure_returns_false():
    """SDK 예외는 전파하지 않고 False"""
    notifier = EmailNotifier(api_key="re_test")

    with patch(
        "app.services.notifier.resend.Emails.send", side_effect=RuntimeError("bad address")
    ):
        sent = await notifier.send("bad@x.com", "Subject", "<p>hi</p>", "hi")

    assert sent is False


async def test_send_timeout_returns_false(test_settings):
    notifier = EmailNotifier(api_key="re_test")
    notifier.settings = test_settings.model_copy(update={"email_timeout_seconds": 0.01})

    def slow_send(params):
        time.sleep(0.2)
        return {"id": "late"}

    with patch("app.services.notifier.resend.Emails.send", side_effect=slow_send):
        sent = await notifier.send("a@x.com", "Subject", "<p>hi</p>", "hi")

    assert sent is False
