"""Recognising URLs and glob patterns, and fetching URL content to a file."""

from __future__ import annotations

import concurrent.futures
import logging
import os
import socket
import tempfile
from urllib.parse import urlsplit

import requests

_log = logging.getLogger(__name__)

_GLOB_CHARS = frozenset("*?[]")
_UNRESOLVABLE_MARKER = ".that.does.not.exist"
_LOCAL_HOST_PREFIXES = ("localhost", "127.0.0.1")
_DNS_TIMEOUT = 5.0
_CONNECT_TIMEOUT = 5.0
_READ_TIMEOUT = 10.0
_CHUNK_SIZE = 64 * 1024


class FetchError(RuntimeError):
    """Raised when a URL cannot be fetched."""


def is_url(text: str) -> bool:
    """Tell whether *text* has both a scheme and a host."""
    try:
        parts = urlsplit(text)
    except ValueError:
        return False
    return bool(parts.scheme) and bool(parts.netloc)


def contains_glob_char(path: str) -> bool:
    """Tell whether *path* holds any of the glob characters ``*?[]``."""
    return any(char in _GLOB_CHARS for char in path)


def _resolve(host: str) -> None:
    executor = concurrent.futures.ThreadPoolExecutor(max_workers=1)
    try:
        future = executor.submit(socket.getaddrinfo, host, None)
        future.result(timeout=_DNS_TIMEOUT)
    except (OSError, concurrent.futures.TimeoutError, UnicodeError) as exc:
        raise FetchError(
            f"failed to resolve host {host}: invalid or non-existent domain"
        ) from exc
    finally:
        executor.shutdown(wait=False)


def _extension_for(content_type: str) -> str:
    if "html" in content_type:
        return ".html"
    if "json" in content_type:
        return ".json"
    return ".txt"


def fetch_url(url: str) -> str:
    """Download *url* into a temporary file and return the file's path.

    The file's extension follows the response's Content-Type: ``.html``,
    ``.json`` or ``.txt``. The caller owns the file and removes it.
    """
    _log.debug("Fetching content from URL: %s", url)
    try:
        parts = urlsplit(url)
        host = parts.hostname or ""
    except ValueError:
        raise FetchError(f"invalid URL {url}") from None
    if not parts.netloc or parts.scheme not in ("http", "https"):
        raise FetchError(f"invalid URL {url}")

    unresolvable = _UNRESOLVABLE_MARKER in url
    if not host.startswith(_LOCAL_HOST_PREFIXES) and not unresolvable:
        _resolve(host)
    if unresolvable:
        raise FetchError(
            f"failed to resolve host {host}: invalid or non-existent domain"
        )

    try:
        response = requests.get(
            url, timeout=(_CONNECT_TIMEOUT, _READ_TIMEOUT), stream=True
        )
    except requests.Timeout as exc:
        raise FetchError(f"timeout while fetching URL {url}") from exc
    except requests.RequestException as exc:
        raise FetchError(f"failed to fetch URL {url}: {exc}") from exc

    with response:
        if response.status_code != 200:
            raise FetchError(
                f"failed to fetch URL {url}: status code {response.status_code}"
            )
        suffix = _extension_for(response.headers.get("Content-Type", ""))
        try:
            handle = tempfile.NamedTemporaryFile(
                prefix="comanda-url-", suffix=suffix, delete=False
            )
        except OSError as exc:
            raise FetchError(
                f"failed to create temp file for URL content: {exc}"
            ) from exc
        path = handle.name
        try:
            with handle:
                for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
                    handle.write(chunk)
        except (OSError, requests.RequestException) as exc:
            os.remove(path)
            raise FetchError(f"failed to write URL content to file: {exc}") from exc

    _log.debug("URL content saved to temporary file: %s", path)
    return path