"""Hit counting for the static file routes."""
from __future__ import annotations

import threading

from starlette.types import ASGIApp, Receive, Scope, Send


class RequestCounter:
    """Lock-protected counter shared by every request handled by one app."""

    def __init__(self) -> None:
        self._count = 0
        self._lock = threading.Lock()

    def increment(self) -> None:
        with self._lock:
            self._count += 1

    def reset(self) -> int:
        """Set the counter back to zero and return the value it held."""

        with self._lock:
            previous = self._count
            self._count = 0
        return previous

    def read(self) -> int:
        with self._lock:
            return self._count


class MetricsMiddleware:
    """ASGI wrapper that records a hit before delegating to ``app``.

    The hit is recorded before the wrapped application runs, so requests that
    end in a 404 or an exception are still counted.
    """

    def __init__(self, app: ASGIApp, counter: RequestCounter) -> None:
        self.app = app
        self.counter = counter

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            self.counter.increment()
        await self.app(scope, receive, send)


def render_metrics_page(hits: int) -> str:
    return (
        "<html> <body> <h1>Welcome, Chirpy Admin</h1> "
        f"<p>Chirpy has been visited {hits} times!</p></body></html>"
    )


__all__ = ["RequestCounter", "MetricsMiddleware", "render_metrics_page"]
