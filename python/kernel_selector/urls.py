"""URL helpers for notebook server endpoints and kernel resources."""

from urllib.parse import quote, urljoin, urlsplit


def url_path_join(*pieces: str) -> str:
    """Join URL pieces with single slashes.

    Leading slash of the first piece and trailing slash of the last piece
    are preserved; empty pieces are dropped.
    """
    parts = [p for p in pieces if p]
    if not parts:
        return ""
    initial = parts[0].startswith("/")
    final = parts[-1].endswith("/")
    stripped = [p.strip("/") for p in parts]
    result = "/".join(s for s in stripped if s)
    if initial:
        result = "/" + result
    if final and result != "/":
        result += "/"
    return result


def url_join_encode(base: str, *pieces: str) -> str:
    """Join ``pieces`` onto ``base``, percent-encoding each path segment.

    The base is used verbatim (it is assumed to be already encoded).

    Example:
        >>> url_join_encode("http://localhost:8888/", "api/kernelspecs")
        'http://localhost:8888/api/kernelspecs'
    """
    encoded = [
        "/".join(quote(segment, safe="") for segment in piece.split("/"))
        for piece in pieces
    ]
    return url_path_join(base, *encoded)


def resolve_url(base: str, url: str) -> str:
    """Resolve a resource URL against the server base.

    Absolute URLs (with a scheme) are returned unchanged; server-relative
    ones such as ``/kernelspecs/python3/kernel.js`` are joined onto the base.
    """
    if urlsplit(url).scheme or not base:
        return url
    return urljoin(base, url)


__all__ = ["url_path_join", "url_join_encode", "resolve_url"]
