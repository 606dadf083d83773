"""Page fetching with SSRF protection."""
from __future__ import annotations

import logging
import socket
import time
from dataclasses import dataclass, field
from ipaddress import ip_address
from urllib.parse import urljoin, urlparse

import requests

from seo_auditor.config.settings import settings

logger = logging.getLogger(__name__)


@dataclass
class FetchedPage:
    """Raw page plus the response metadata the audit can use."""
    url: str
    final_url: str
    html: str
    headers: dict[str, str] = field(default_factory=dict)
    status_code: int = 200
    load_time_seconds: float = 0.0

    @property
    def is_https(self) -> bool:
        return urlparse(self.final_url).scheme == "https"


def is_url(source: str) -> bool:
    parsed = urlparse(source)
    return parsed.scheme in {"http", "https"}


def _validate_ip(ip_str: str) -> tuple[bool, str]:
    """Check if an IP address is safe (not private/internal)."""
    try:
        ip = ip_address(ip_str)
        if ip.is_private or ip.is_loopback or ip.is_reserved or ip.is_link_local:
            return False, f"Access to private/internal IP addresses is forbidden: {ip_str}"
        return True, ""
    except ValueError:
        return False, f"Invalid IP address: {ip_str}"


def _resolve_and_validate_url(url: str) -> tuple[str, str]:
    """Resolve the URL's hostname and refuse private or internal targets.

    Returns (resolved_ip, error_message); the error is empty when the URL is safe.
    """
    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"}:
        return "", "Only http and https schemes are allowed"

    hostname = parsed.hostname
    if not hostname:
        return "", "Invalid URL: hostname not found"

    try:
        resolved_ip = socket.gethostbyname(hostname)
    except socket.gaierror:
        return "", f"Could not resolve hostname: {hostname}"

    is_safe, error_msg = _validate_ip(resolved_ip)
    if not is_safe:
        return "", error_msg
    return resolved_ip, ""


def _check_content_length(response: requests.Response) -> None:
    limit = settings.fetcher.max_response_size
    content_length = response.headers.get("Content-Length")
    if content_length and content_length.isdigit() and int(content_length) > limit:
        response.close()
        raise ValueError(f"Response too large: {int(content_length)} bytes (max {limit})")


def _get(url: str) -> requests.Response:
    response = requests.get(
        url,
        timeout=settings.fetcher.request_timeout,
        headers={"User-Agent": settings.fetcher.user_agent},
        allow_redirects=False,
        stream=True,
    )
    _check_content_length(response)
    return response


def _read_body(response: requests.Response) -> str:
    limit = settings.fetcher.max_response_size
    chunks = []
    total_size = 0
    for chunk in response.iter_content(chunk_size=8192, decode_unicode=False):
        total_size += len(chunk)
        if total_size > limit:
            response.close()
            raise ValueError(f"Response too large: exceeded {limit} bytes")
        chunks.append(chunk)

    content_bytes = b"".join(chunks)
    encoding = response.encoding or "utf-8"
    try:
        return content_bytes.decode(encoding)
    except (UnicodeDecodeError, LookupError):
        return content_bytes.decode("utf-8", errors="replace")


def fetch_page(url: str) -> FetchedPage:
    """
    Fetch a page for auditing.

    Security measures:
    - Only accepts http/https URLs (no local file paths)
    - Validates resolved IP is not private/internal (SSRF protection)
    - Follows redirects manually, validating every target
    - Limits response size to prevent memory exhaustion

    Raises:
        ValueError: URL rejected or response too large
        requests.RequestException: network failure or HTTP error status
    """
    if not is_url(url):
        raise ValueError("Only http and https URLs are allowed")

    _, error_msg = _resolve_and_validate_url(url)
    if error_msg:
        raise ValueError(f"SSRF protection: {error_msg}")

    started = time.perf_counter()
    current = url
    response = _get(current)

    redirect_count = 0
    while response.is_redirect and redirect_count < settings.fetcher.max_redirects:
        redirect_count += 1
        location = response.headers.get("Location", "")
        if not location:
            break

        redirect_url = urljoin(current, location)
        _, redirect_error = _resolve_and_validate_url(redirect_url)
        if redirect_error:
            raise ValueError(f"SSRF protection: Redirect blocked - {redirect_error}")

        logger.debug("Following redirect %s -> %s", current, redirect_url)
        response.close()
        current = redirect_url
        response = _get(current)

    response.raise_for_status()
    html = _read_body(response)
    load_time = round(time.perf_counter() - started, 2)
    logger.debug("Fetched %s (%d bytes) in %.2fs", current, len(html), load_time)

    return FetchedPage(
        url=url,
        final_url=current,
        html=html,
        headers=dict(response.headers),
        status_code=response.status_code,
        load_time_seconds=load_time,
    )
