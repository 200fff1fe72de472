from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional

from .document import Document, default_document
from .mount import mount
from .utils import deep_merge

logger = logging.getLogger(__name__)

AxeRunner = Callable[..., Dict[str, Any]]


def configure_axe(default_options: Optional[Mapping[str, Any]] = None,
                  document: Optional[Document] = None) -> AxeRunner:
    """Build an ``axe(html, additional_options=None)`` runner bound to ``default_options``.

    Without a ``document`` the runner audits inside a shared headless page
    launched on first use.
    """
    defaults = deep_merge(default_options)

    def axe(html: Any, additional_options: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        options = deep_merge(defaults, additional_options)
        doc = document or default_document()
        element, restore = mount(doc, html)
        try:
            doc.ensure_axe()
            results = doc.run_axe(element, options)
        finally:
            restore()
        logger.debug("axe run finished with %d violation(s)", len(results.get("violations") or []))
        return results

    return axe
