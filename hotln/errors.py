"""Error taxonomy shared by both client modes."""


class HotlnError(Exception):
    """Base class for everything hotln raises."""


class HttpError(HotlnError):
    """The HTTP exchange could not be completed (DNS, connect, TLS, timeout)."""


class ApiError(HotlnError):
    """Linear rejected the request, via HTTP status or an embedded ``errors`` field."""


class ParseError(HotlnError):
    """The response was not valid JSON or lacked an expected field."""


class ProxyError(HotlnError):
    """The relay answered with a non-2xx status. ``body`` is kept verbatim."""

    def __init__(self, status: int, body: str) -> None:
        super().__init__(f"Proxy returned error {status}: {body}")
        self.status = status
        self.body = body


class ConfigError(HotlnError):
    """Not enough configuration to pick a client mode."""
