"""Extraction of title, paragraph text and links from web pages."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from urllib.parse import urlsplit

import requests
from bs4 import BeautifulSoup

_log = logging.getLogger(__name__)

USER_AGENT = "Mozilla/5.0 (compatible; Comanda/1.0)"


@dataclass
class ScrapedData:
    """What was taken from one page."""

    url: str
    title: str = ""
    text: list[str] = field(default_factory=list)
    links: list[str] = field(default_factory=list)
    status_code: int = 0
    content_type: str = ""


class ScrapeError(RuntimeError):
    """Raised when a page cannot be retrieved."""


def _host_of(url: str) -> str:
    try:
        netloc = urlsplit(url).netloc
    except ValueError:
        return ""
    return netloc.rpartition("@")[2]


class Scraper:
    """Fetches pages and extracts structured data from their HTML."""

    def __init__(self, timeout: float = 10.0) -> None:
        self.timeout = timeout
        self.allowed_domains: list[str] = []
        self.headers: dict[str, str] = {}

    def set_custom_headers(self, headers: dict[str, str]) -> None:
        """Add headers sent with every request."""
        self.headers.update(headers)

    def allow_domains(self, *domains: str) -> None:
        """Restrict scraping to *domains* and their subdomains; none means all."""
        self.allowed_domains = list(domains)
        _log.info("[SCRAPER] Set allowed domains to: %s", self.allowed_domains)

    def is_allowed(self, host: str) -> bool:
        """Tell whether requests to *host* may be made."""
        if not self.allowed_domains:
            return True
        return any(
            host == domain or host.endswith("." + domain)
            for domain in self.allowed_domains
        )

    def scrape(self, url: str) -> ScrapedData:
        """Fetch *url* and extract its title, paragraphs and links.

        A request to a host outside the allowed domains is not made and an
        empty result comes back.
        """
        data = ScrapedData(url=url)
        host = _host_of(url)
        if not self.is_allowed(host):
            _log.warning("[SCRAPER] Request aborted due to disallowed domain: %s", host)
            return data

        headers = {"User-Agent": USER_AGENT, **self.headers}
        try:
            response = requests.get(url, headers=headers, timeout=self.timeout)
        except requests.RequestException as exc:
            raise ScrapeError(str(exc)) from exc

        data.status_code = response.status_code
        data.content_type = response.headers.get("Content-Type", "")
        if response.status_code >= 203:
            raise ScrapeError(f"{response.status_code} {response.reason}")

        if "html" in data.content_type.lower():
            soup = BeautifulSoup(response.text, "html.parser")
            for element in soup.select("title"):
                data.title = element.get_text()
            data.text = [
                text for text in (p.get_text() for p in soup.select("p")) if text
            ]
            data.links = [
                link for link in (a.get("href") for a in soup.select("a[href]")) if link
            ]
        return data