"""
Local preview server for the output directory.

Serves dist/ over HTTP from a background thread while watch mode rebuilds it.
"""

import os
import threading
from functools import partial
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from vitae.contexts.building.logger import _log_debug, _log_info

load_dotenv()
PREVIEW_PORT = int(os.getenv("PREVIEW_PORT", "8000"))


class _QuietHandler(SimpleHTTPRequestHandler):
    def log_message(self, format, *args):
        _log_debug(f"preview: {format % args}")


class PreviewServer:
    """
    Threaded static file server.

    Args:
        directory: Directory to serve
        port: TCP port (0 picks a free one)
        host: Bind address
    """

    def __init__(self, directory: Union[str, Path], port: int = PREVIEW_PORT, host: str = "127.0.0.1"):
        self.directory = Path(directory)
        self.port = port
        self.host = host
        self.server: Optional[ThreadingHTTPServer] = None
        self.server_thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self.server is not None

    @property
    def url(self) -> str:
        return f"http://localhost:{self.port}/"

    def start(self) -> str:
        """Start serving; returns the URL."""
        if self.is_running:
            self.stop()

        handler = partial(_QuietHandler, directory=str(self.directory))
        self.server = ThreadingHTTPServer((self.host, self.port), handler)
        self.port = self.server.server_address[1]

        self.server_thread = threading.Thread(target=self.server.serve_forever, daemon=True)
        self.server_thread.start()
        _log_info(f"Serving {self.directory} at {self.url}")
        return self.url

    def stop(self) -> None:
        """Shut down the server and wait for its thread."""
        if self.server:
            self.server.shutdown()
            self.server.server_close()
            self.server = None

        if self.server_thread:
            self.server_thread.join(timeout=2)
            self.server_thread = None
