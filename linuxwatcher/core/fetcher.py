"""Makefile fetcher — one bounded HTTP GET, prefix read, QThread worker.

Architecture:
  MakefileFetcher — pure Python logic (no Qt dependency), blocking fetch()
  FetchWorker     — QThread wrapper with pyqtSignal for thread-safe UI updates
"""

import codecs
import http.client
import logging
from urllib.error import URLError
from urllib.request import HTTPHandler, HTTPSHandler, Request, build_opener

from linuxwatcher.branding import AppBranding
from linuxwatcher.core.models import FetchFailure, FetchResult, FetchSuccess

logger = logging.getLogger(__name__)

KERNEL_MAKEFILE_URL = (
    "https://git.kernel.org/pub/scm/linux/kernel/git/torvalds/linux.git/plain/Makefile"
)

CONNECT_TIMEOUT = 15    # seconds
READ_TIMEOUT = 10       # seconds
# Enough for the SPDX line plus the five version assignments
PREFIX_BYTES = 256


def read_prefix(stream, limit: int) -> str:
    """Read at most ``limit`` bytes from ``stream`` and decode as UTF-8.

    A multibyte character split by the limit is dropped rather than
    replaced. Invalid UTF-8 before that point raises UnicodeDecodeError.
    """
    data = b""
    while len(data) < limit:
        chunk = stream.read(limit - len(data))
        if not chunk:
            break
        data += chunk
    decoder = codecs.getincrementaldecoder('utf-8')()
    return decoder.decode(data, final=False)


# ── Split connect / read timeouts ─────────────────────────────────────
# urllib takes a single timeout, used for the connect. Once connected,
# the socket timeout is switched to the read timeout.

class _ReadTimeoutMixin:
    read_timeout: float | None = None

    def connect(self):
        super().connect()
        if self.read_timeout is not None:
            self.sock.settimeout(self.read_timeout)


class _HTTPConnection(_ReadTimeoutMixin, http.client.HTTPConnection):
    pass


class _HTTPSConnection(_ReadTimeoutMixin, http.client.HTTPSConnection):
    pass


class _TimeoutHTTPHandler(HTTPHandler):
    def __init__(self, read_timeout: float):
        super().__init__()
        self._read_timeout = read_timeout

    def _connection(self, host, **kwargs):
        conn = _HTTPConnection(host, **kwargs)
        conn.read_timeout = self._read_timeout
        return conn

    def http_open(self, req):
        return self.do_open(self._connection, req)


class _TimeoutHTTPSHandler(HTTPSHandler):
    def __init__(self, read_timeout: float):
        super().__init__()
        self._read_timeout = read_timeout

    def _connection(self, host, **kwargs):
        conn = _HTTPSConnection(host, **kwargs)
        conn.read_timeout = self._read_timeout
        return conn

    def https_open(self, req):
        return self.do_open(self._connection, req, context=self._context)


class MakefileFetcher:
    """Fetches the head of the kernel Makefile.

    fetch() is synchronous (blocking) — designed to run in a QThread.
    """

    def __init__(self, url: str = KERNEL_MAKEFILE_URL,
                 connect_timeout: float = CONNECT_TIMEOUT,
                 read_timeout: float = READ_TIMEOUT,
                 prefix_bytes: int = PREFIX_BYTES):
        self.url = url
        self.connect_timeout = connect_timeout
        self.read_timeout = read_timeout
        self.prefix_bytes = prefix_bytes

    def _open(self, req: Request):
        opener = build_opener(
            _TimeoutHTTPHandler(self.read_timeout),
            _TimeoutHTTPSHandler(self.read_timeout),
        )
        return opener.open(req, timeout=self.connect_timeout)

    def fetch(self) -> FetchResult:
        """GET the URL and return the decoded body prefix.

        Every I/O failure (HTTP status, timeout, DNS, reset, bad UTF-8)
        comes back as FetchFailure; the cause is only logged.
        """
        req = Request(self.url, method='GET', headers={
            'User-Agent': AppBranding.user_agent(),
        })

        try:
            with self._open(req) as resp:
                text = read_prefix(resp, self.prefix_bytes)
        except (URLError, OSError, http.client.HTTPException, UnicodeDecodeError) as e:
            logger.warning("Failed to fetch %s: %s", self.url, e)
            return FetchFailure(url=self.url, error=e)

        logger.info("Fetched %d characters from %s", len(text), self.url)
        return FetchSuccess(url=self.url, text=text)


# ── QThread Worker ───────────────────────────────────────────────────

# Import PyQt6 only when the worker is actually used (lazy import
# to keep MakefileFetcher itself free of Qt dependency)

def _get_worker_class():
    """Lazy import to avoid PyQt6 at module level."""
    from PyQt6.QtCore import QThread, pyqtSignal

    class FetchWorker(QThread):
        """Runs a single fetch in the background.

        finished_with is emitted exactly once per run and is dispatched
        to the receiver's thread by Qt's signal/slot mechanism.
        """

        finished_with = pyqtSignal(object)     # FetchSuccess | FetchFailure

        def __init__(self, fetcher: MakefileFetcher, parent=None):
            super().__init__(parent)
            self._fetcher = fetcher

        def run(self):
            """Thread entry point."""
            try:
                result = self._fetcher.fetch()
            except Exception as e:
                logger.error("Unexpected fetch error: %s", e)
                result = FetchFailure(url=self._fetcher.url, error=e)
            self.finished_with.emit(result)

    return FetchWorker


# Module-level accessor
_FetchWorkerClass = None


def get_fetch_worker_class():
    """Get the FetchWorker class (lazy-imported to avoid PyQt6 at import time)."""
    global _FetchWorkerClass
    if _FetchWorkerClass is None:
        _FetchWorkerClass = _get_worker_class()
    return _FetchWorkerClass
