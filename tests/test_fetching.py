import os
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

from comanda.fetching import FetchError, contains_glob_char, fetch_url, is_url

ROUTES = {
    "/text": (200, "text/plain", b"Hello, World!"),
    "/html": (200, "text/html", b"<html><body>Hello, World!</body></html>"),
    "/json": (200, "application/json", b'{"message": "Hello, World!"}'),
    "/error": (404, "text/plain", b"Not Found"),
}


class _Handler(BaseHTTPRequestHandler):
    def do_GET(self):
        status, content_type, body = ROUTES.get(self.path, (404, "text/plain", b""))
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def server_url():
    server = ThreadingHTTPServer(("127.0.0.1", 0), _Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield f"http://127.0.0.1:{server.server_address[1]}"
    server.shutdown()
    server.server_close()


@pytest.mark.parametrize(
    "text, expected",
    [
        ("http://example.com", True),
        ("https://example.com/path?query=value", True),
        ("example.com", False),
        ("", False),
        ("/path/to/file.txt", False),
        ("path/to/file.txt", False),
    ],
)
def test_is_url(text, expected):
    assert is_url(text) is expected


@pytest.mark.parametrize(
    "path, expected",
    [
        ("*.txt", True),
        ("file?.txt", True),
        ("file[0-9].txt", True),
        ("plain/file.txt", False),
        ("", False),
    ],
)
def test_contains_glob_char(path, expected):
    assert contains_glob_char(path) is expected


@pytest.mark.parametrize(
    "route, suffix",
    [("/text", ".txt"), ("/html", ".html"), ("/json", ".json")],
)
def test_fetch_url_writes_content(server_url, route, suffix):
    path = fetch_url(server_url + route)
    try:
        assert path.endswith(suffix)
        assert os.path.basename(path).startswith("comanda-url-")
        with open(path, "rb") as handle:
            assert handle.read() == ROUTES[route][2]
    finally:
        os.remove(path)


def test_fetch_url_error_status(server_url):
    with pytest.raises(FetchError, match="status code 404"):
        fetch_url(server_url + "/error")


def test_fetch_url_unresolvable_host():
    with pytest.raises(FetchError, match="failed to resolve host"):
        fetch_url("http://invalid.url.that.does.not.exist")


@pytest.mark.parametrize(
    "url", ["ftp://example.com/file", "example.com", "http://"]
)
def test_fetch_url_rejects_invalid_url(url):
    with pytest.raises(FetchError, match="invalid URL"):
        fetch_url(url)