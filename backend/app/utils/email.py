import re
from collections.abc import Iterable

from email_validator import EmailNotValidError, validate_email

# 초대 입력 문자열 구분자 (쉼표, 세미콜론, 공백)
INVITEE_SEPARATORS = re.compile(r"[,\s;]+")


def normalize_email(email: str) -> str:
    """이메일 정규화 (앞뒤 공백 제거 + 소문자)"""
    return email.strip().lower()


def is_valid_email(email: str | None) -> bool:
    """이메일 형식 검증 (DNS 조회 없이 형태만 확인)"""
    if not email:
        return False
    try:
        validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def split_invitees(invitees: str | Iterable[str] | None) -> list[str]:
    """구분자 문자열 또는 목록을 정규화된 이메일 목록으로 변환 (순서 유지, 중복 제거)"""
    if invitees is None:
        return []
    if isinstance(invitees, str):
        raw = INVITEE_SEPARATORS.split(invitees)
    else:
        raw = [part for item in invitees for part in INVITEE_SEPARATORS.split(item)]

    emails: list[str] = []
    seen: set[str] = set()
    for item in raw:
        email = normalize_email(item)
        if email and email not in seen:
            seen.add(email)
            emails.append(email)
    return emails
