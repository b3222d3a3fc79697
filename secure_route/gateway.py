"""WSGI request path parsing."""

from typing import Dict, Optional
from urllib.parse import quote, urlsplit


def _get_request_method(environ: Dict) -> str:
    """Return the request method, GET when the server did not set one."""
    return (environ.get("REQUEST_METHOD") or "GET").upper()


def _get_request_path(environ: Dict) -> Optional[str]:
    """Return the raw (still percent-encoded) request path.

    Servers that expose the original request line are preferred since
    PATH_INFO is already decoded. Returns None if no path is available.
    """
    raw_uri = environ.get("REQUEST_URI") or environ.get("RAW_URI")
    if raw_uri:
        if "://" in raw_uri:
            return urlsplit(raw_uri).path or "/"
        # origin-form: "//users" is a path, not an authority
        path = raw_uri.partition("?")[0].partition("#")[0]
        return path or "/"

    if "PATH_INFO" not in environ and "SCRIPT_NAME" not in environ:
        return None

    # PEP 3333 hands over native strings decoded as latin-1
    path = environ.get("SCRIPT_NAME", "") + environ.get("PATH_INFO", "")
    path = path.encode("latin-1").decode("utf-8", "replace")
    return quote(path, safe="/:@!$&'()*+,;=-._~")


class RequestPath:
    """Request method and path of a WSGI call."""

    def __init__(self, environ: Dict):
        """Initialize request info from a WSGI environ."""
        self.method = _get_request_method(environ)
        self.path = _get_request_path(environ)
