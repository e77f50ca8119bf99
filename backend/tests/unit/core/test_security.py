"""초대 토큰 테스트"""

import re

from app.core.security import generate_invite_token, tokens_match


def test_token_is_url_safe_and_long_enough():
    token = generate_invite_token()

    # 24바이트 → base64url 32자
    assert len(token) == 32
    assert re.fullmatch(r"[A-Za-z0-9_-]+", token)


def test_tokens_do_not_collide():
    tokens = {generate_invite_token() for _ in range(1000)}

    assert len(tokens) == 1000


def test_tokens_match():
    token = generate_invite_token()

    assert tokens_match(token, token) is True
    assert tokens_match(token, token + "x") is False
    assert tokens_match(token, "") is False
