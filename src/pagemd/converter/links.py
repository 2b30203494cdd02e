"""URL rewriting for links and images."""

from urllib.parse import unquote_plus, urljoin, urlsplit

TRACKING_PARAMS = frozenset({
    "utm_source",
    "utm_medium",
    "utm_campaign",
    "utm_term",
    "utm_content",
    "fbclid",
    "gclid",
})


def strip_tracking_params(href: str) -> str:
    """Remove analytics parameters from the query of ``href``.

    Every other part of the URL is kept exactly as written: remaining
    parameters and their order and encoding, relative or absolute form,
    trailing slash and fragment. Malformed URLs are returned unchanged.

    Example:
        >>> strip_tracking_params("https://example.com?utm_source=a&utm_medium=b&id=123")
        'https://example.com?id=123'

    """
    try:
        urlsplit(href)
    except ValueError:
        return href

    rest, hash_mark, fragment = href.partition("#")
    base, question_mark, query = rest.partition("?")
    if not question_mark:
        return href

    kept = [param for param in query.split("&") if _param_name(param) not in TRACKING_PARAMS]
    if len(kept) == len(query.split("&")):
        return href

    new_query = "&".join(kept)
    rebuilt = f"{base}?{new_query}" if new_query else base
    return f"{rebuilt}{hash_mark}{fragment}"


def resolve_url(href: str, base_url: str | None) -> str:
    """Resolve a relative ``href`` against ``base_url``.

    Absolute URLs, in-page fragments and unparsable input are returned as is.
    """
    if not base_url or not href or href.startswith("#"):
        return href
    try:
        return urljoin(base_url, href)
    except ValueError:
        return href


def _param_name(param: str) -> str:
    name, _, _ = param.partition("=")
    return unquote_plus(name)
