# textshare/utils/links.py
# Link assembly and fragment extraction

from __future__ import annotations

from urllib.parse import quote, urlencode, urlsplit


def build_link(origin: str, path: str, token: str) -> str:
    """Assemble `<origin><path>#<token>`."""
    origin = origin.rstrip("/")
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{origin}{path}#{token}"


def fragment_of(url: str) -> str:
    """Return the raw fragment of url (without '#'), '' when there is none."""
    return urlsplit(url).fragment


def strip_hash(fragment: str) -> str:
    """Fragments observed from a location may still carry the leading '#'."""
    return fragment[1:] if fragment.startswith("#") else fragment


def build_qr_url(service_url: str, link: str, size: int = 200) -> str:
    """URL of a QR image for link, rendered by an external service."""
    query = urlencode(
        {"size": f"{size}x{size}", "data": link, "color": "000000"},
        quote_via=quote,
        safe="",
    )
    return f"{service_url}?{query}"
