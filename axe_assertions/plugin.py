"""pytest integration: an ``axe`` fixture bound to a shared headless page."""
from __future__ import annotations

from typing import Any, Dict, Iterator

import pytest

from .config import get_settings, override_settings
from .document import Document
from .scanner import configure_axe


def pytest_addoption(parser) -> None:
    group = parser.getgroup("axe", "accessibility assertions")
    group.addoption(
        "--axe-reports-dir",
        action="store",
        default=None,
        help="directory for accessibility reports written by to_have_no_violations",
    )
    parser.addini("axe_reports_dir", "directory for accessibility reports", default="")


def pytest_configure(config) -> None:
    reports_dir = config.getoption("--axe-reports-dir") or config.getini("axe_reports_dir")
    if reports_dir:
        override_settings(reports_dir=reports_dir)


@pytest.fixture(scope="session")
def axe_document() -> Iterator[Document]:
    document = Document.launch(get_settings())
    try:
        yield document
    finally:
        document.close()


@pytest.fixture
def axe_options() -> Dict[str, Any]:
    """Default axe-core options; override in a conftest to change them."""
    return {}


@pytest.fixture
def axe(axe_document: Document, axe_options: Dict[str, Any]):
    return configure_axe(axe_options, document=axe_document)
