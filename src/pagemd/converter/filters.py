"""Profile content filters applied before rendering."""

from bs4 import Tag

from pagemd.detector.filters import HiddenElementFilter
from pagemd.dom import clone, is_valid_selector, parse_html, remove_matching, select_safe
from pagemd.logger import logger
from pagemd.profiles.models import ContentFilters


def apply_content_filters(root: Tag, filters: ContentFilters) -> Tag:
    """Narrow and prune ``root`` according to the profile filters.

    Order: keep ``include_css`` matches, drop ``exclude_css`` matches, then
    drop hidden elements unless ``include_hidden`` is set. ``root`` must be a
    private copy; it is modified in place.

    Returns:
        The tree to render. This is a new container when ``include_css``
        selected anything, otherwise ``root`` itself.

    """
    selected = select_included(root, filters.include_css)
    if selected is not None:
        root = selected

    excluded = remove_matching(root, filters.exclude_css)
    if excluded:
        logger.debug("Excluded %d element(s) by selector", excluded)

    if not filters.include_hidden:
        HiddenElementFilter().apply(root)

    return root


def select_included(root: Tag, selectors: list[str]) -> Tag | None:
    """Gather the elements matched by ``selectors`` into a new container.

    Only the outermost matches are kept, in document order, so content is
    never emitted twice.

    Returns:
        The container, or None when there is no valid selector to apply.

    """
    valid = [selector for selector in selectors if is_valid_selector(selector)]
    for selector in selectors:
        if selector not in valid:
            logger.warning("Ignoring invalid include selector %r", selector)
    if not valid:
        return None

    matched = {id(element) for selector in valid for element in select_safe(root, selector)}
    container = parse_html("")
    for element in root.find_all(True):
        if id(element) not in matched:
            continue
        if any(id(parent) in matched for parent in element.parents):
            continue
        container.append(clone(element))

    logger.debug("Include selectors kept %d element(s)", len(container.contents))
    return container
