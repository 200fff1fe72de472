from __future__ import annotations

import copy
from typing import Any, Dict, List, Optional

import pytest

from axe_assertions import config
from axe_assertions.errors import EngineError


class FakeElement:
    def __init__(self, markup: str):
        self.markup = markup


class FakeDocument:
    """In-memory stand-in for ``Document`` that records what axe was asked to do."""

    def __init__(self, inner_html: str = "", results: Optional[Dict[str, Any]] = None,
                 error: Optional[Exception] = None):
        self.inner_html = inner_html
        self.results = results if results is not None else {"violations": []}
        self.error = error
        self.attached: List[FakeElement] = []
        self.runs: List[Dict[str, Any]] = []
        self.axe_injected = False
        self._body = FakeElement("<body>")

    def body(self) -> FakeElement:
        return self._body

    def is_element(self, value: Any) -> bool:
        return isinstance(value, FakeElement)

    def contains(self, element: FakeElement) -> bool:
        return element is self._body or element in self.attached

    def outer_html(self, element: FakeElement) -> str:
        return element.markup

    def ensure_axe(self) -> None:
        self.axe_injected = True

    def run_axe(self, root: Any, options: Dict[str, Any]) -> Dict[str, Any]:
        self.runs.append({"root": root, "options": options, "body": self.inner_html})
        if self.error is not None:
            raise self.error
        return copy.deepcopy(self.results)


def make_violation(rule_id: str = "image-alt", nodes: Optional[List[Dict[str, Any]]] = None,
                   help: str = "Images must have alternate text") -> Dict[str, Any]:
    if nodes is None:
        nodes = [make_node()]
    return {
        "id": rule_id,
        "help": help,
        "helpUrl": f"https://dequeuniversity.com/rules/axe/4.9/{rule_id}?application=axeAPI",
        "nodes": nodes,
    }


def make_node(target=("img",), html: str = '<img src="#">',
              summary: str = "Fix any of the following:\n  Element does not have an alt attribute") -> Dict[str, Any]:
    return {"target": list(target), "html": html, "failureSummary": summary}


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.delenv("NO_COLOR", raising=False)
    config.override_settings(reports_dir=tmp_path / "axe-reports", color=False)
    yield
    config.reset_settings()


@pytest.fixture
def reports_dir(tmp_path):
    return tmp_path / "axe-reports"


@pytest.fixture
def fake_document():
    return FakeDocument(inner_html="<main><p>existing</p></main>")


@pytest.fixture
def failing_engine_document():
    return FakeDocument(inner_html="<p>before</p>", error=EngineError("axe not loaded"))


@pytest.fixture
def violation_results():
    return {
        "testEngine": {"name": "axe-core", "version": "4.9.1"},
        "violations": [make_violation()],
    }


@pytest.fixture
def clean_results():
    return {"testEngine": {"name": "axe-core", "version": "4.9.1"}, "violations": []}
