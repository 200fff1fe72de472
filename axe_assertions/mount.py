from __future__ import annotations

import logging
import re
from contextlib import contextmanager
from typing import Any, Callable, Iterator, Tuple

from bs4 import Tag

from .errors import InvalidInputError

logger = logging.getLogger(__name__)

TAG_RE = re.compile(r"(<([^>]+)>)", re.I)

Restore = Callable[[], None]


def is_html_string(value: Any) -> bool:
    return isinstance(value, str) and bool(TAG_RE.search(value))


def is_html_element(document, value: Any) -> bool:
    return isinstance(value, Tag) or document.is_element(value)


def _noop() -> None:
    return None


def mount(document, html: Any) -> Tuple[Any, Restore]:
    """Attach ``html`` to ``document`` and return ``(root, restore)``.

    An element already inside the body is used as-is. A detached element is
    serialized and mounted like a string. Mounting a string replaces the body
    markup; ``restore`` puts the previous markup back (only the first call
    has an effect).
    """
    if is_html_element(document, html):
        if isinstance(html, Tag):
            html = str(html)
        elif document.contains(html):
            return html, _noop
        else:
            html = document.outer_html(html)

    if is_html_string(html):
        original_html = document.inner_html
        restored = False

        def restore() -> None:
            nonlocal restored
            if restored:
                return
            restored = True
            document.inner_html = original_html
            logger.debug("Restored document body (%d chars)", len(original_html))

        document.inner_html = html
        logger.debug("Mounted %d chars of markup into document body", len(html))
        return document.body(), restore

    if isinstance(html, str):
        raise InvalidInputError(f'html parameter ("{html}") has no elements', html)

    raise InvalidInputError(
        f"html parameter should be an HTML string or an HTML element, got {type(html).__name__}",
        html,
    )


@contextmanager
def mounted(document, html: Any) -> Iterator[Any]:
    root, restore = mount(document, html)
    try:
        yield root
    finally:
        restore()
