"""초대 / 확정 알림 이메일 본문"""

from dataclasses import dataclass
from html import escape
from urllib.parse import quote, urlencode

from app.schemas.venue import Venue


@dataclass(frozen=True)
class EmailContent:
    subject: str
    html: str
    text: str


def meeting_link(base_url: str, meeting_id: str, token: str | None = None, email: str | None = None) -> str:
    """회의 페이지 링크 (토큰/이메일이 있으면 인증 링크)"""
    params = {"mid": meeting_id}
    if token and email:
        params["token"] = token
        params["email"] = email
    return f"{base_url}/meet.html?{urlencode(params)}"


def google_maps_link(place: Venue) -> str | None:
    """장소 이름 + 주소로 Google Maps 검색 링크 생성"""
    query = " ".join(
        part for part in (place.name, place.location.formatted_address) if part
    )
    if not query:
        return None
    return f"https://www.google.com/maps/search/?api=1&query={quote(query)}"


def invite_email(
    title: str,
    link: str,
    *,
    is_owner: bool = False,
    owner_name: str | None = None,
) -> EmailContent:
    greeting = f"Hello {escape(owner_name)}," if is_owner and owner_name else "Hello,"
    html = f"""
<p>{greeting}</p>
<p>You have an invitation to <strong>{escape(title)}</strong>.</p>
<p>Please click below to confirm your location and see suggestions:</p>
<p><a href="{escape(link)}">{escape(link)}</a></p>
<p>Thanks,<br/>MiddleGround</p>
"""
    return EmailContent(
        subject=f'You\'re invited to "{title}" on MiddleGround',
        html=html,
        text=f'You\'re invited to "{title}". Open: {link}',
    )


def finalized_email(title: str, place: Venue, details_link: str) -> EmailContent:
    address = place.location.formatted_address or ""
    map_link = google_maps_link(place)
    map_html = f'<p><a href="{escape(map_link)}">Open in Google Maps</a></p>' if map_link else ""
    html = f"""
<p>The meeting <strong>{escape(title)}</strong> is finalized.</p>
<p>Meet at: <strong>{escape(place.name)}</strong><br/>
{escape(address)}</p>
{map_html}
<p>Details: <a href="{escape(details_link)}">{escape(details_link)}</a></p>
"""
    text = "\n".join(
        line for line in (f"Finalized: {title}", place.name, address, map_link or "") if line
    )
    return EmailContent(subject=f"Finalized: {title}", html=html, text=text)
