"""Helpers for comparing organisations by their web domains."""

from __future__ import annotations

from urllib.parse import urlsplit


def extract_domain_from_url(url: str) -> str:
    """Return the lower-cased host of ``url`` without a leading ``www.``.

    Bare domains such as ``example.com/about`` are accepted as well. URLs
    whose host cannot be parsed yield ``""``.
    """

    candidate = url.strip()
    if "://" not in candidate:
        candidate = f"//{candidate}"
    try:
        hostname = urlsplit(candidate).hostname
    except ValueError:
        return ""
    host = (hostname or "").lower().rstrip(".")
    return host.removeprefix("www.")


def extract_domains(urls: tuple[str, ...] | list[str]) -> frozenset[str]:
    return frozenset(domain for domain in map(extract_domain_from_url, urls) if domain)
