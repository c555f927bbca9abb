"""Helpers for building API URLs."""

from __future__ import annotations

from urllib.parse import urlsplit, urlunsplit


def _clean(path: str) -> str:
    """Return the shortest equivalent slash-separated path."""
    rooted = path.startswith("/")
    segments: list[str] = []
    for segment in path.split("/"):
        if segment in ("", "."):
            continue
        if segment == "..":
            if segments and segments[-1] != "..":
                segments.pop()
            elif not rooted:
                segments.append("..")
            continue
        segments.append(segment)
    joined = "/".join(segments)
    if rooted:
        return "/" + joined
    return joined or "."


def join_path(base_url: str, path: str) -> str:
    """Append ``path`` to the path of ``base_url``, cleaning the result."""
    parts = urlsplit(base_url)
    base_path = parts.path
    relative = not base_path.startswith("/")
    first = "/" + base_path if relative else base_path
    joined = _clean("/".join(element for element in (first, path) if element))
    if relative:
        joined = joined[1:]
    if path.endswith("/") and not joined.endswith("/"):
        joined += "/"
    return urlunsplit((parts.scheme, parts.netloc, joined, parts.query, parts.fragment))


def with_path_prefix(base_url: str | None, path_prefix: str) -> str:
    """Return ``base_url`` with ``path_prefix`` appended unless it already ends with it."""
    base_url = base_url or ""
    base_path = urlsplit(base_url).path
    if base_path.rstrip("/").endswith(path_prefix.rstrip("/")):
        return base_url
    return join_path(base_url, path_prefix)


def validate_base_url(base_url: str) -> str:
    """Return ``base_url`` if it is absolute, else raise ``ValueError``."""
    parts = urlsplit(base_url)
    if not parts.scheme or not parts.netloc:
        raise ValueError(
            f'invalid base URL "{base_url}": absolute URL with scheme and host required'
        )
    return base_url