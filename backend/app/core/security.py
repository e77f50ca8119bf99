import secrets

# 24바이트 = 192비트 엔트로피
INVITE_TOKEN_BYTES = 24


def generate_invite_token() -> str:
    """초대 링크용 URL-safe 비밀 토큰 생성"""
    return secrets.token_urlsafe(INVITE_TOKEN_BYTES)


def tokens_match(expected: str, provided: str) -> bool:
    """타이밍 공격을 피하는 토큰 비교"""
    return secrets.compare_digest(expected.encode("utf-8"), provided.encode("utf-8"))
