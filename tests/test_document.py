from __future__ import annotations

from pathlib import Path

import pytest
from playwright.sync_api import Error as PlaywrightError

from axe_assertions.config import override_settings
from axe_assertions.document import Document
from axe_assertions.errors import EngineError


class FakePage:
    """Answers ``evaluate`` calls from a queue of canned results."""

    def __init__(self, *answers):
        self.answers = list(answers)
        self.calls = []
        self.script_tags = []

    def evaluate(self, script, arg=None):
        self.calls.append((script, arg))
        answer = self.answers.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return answer

    def add_script_tag(self, path=None):
        self.script_tags.append(path)


def test_run_axe_returns_results() -> None:
    page = FakePage({"violations": []})

    assert Document(page).run_axe("root", {"rules": {}}) == {"violations": []}
    assert page.calls[0][1] == ["root", {"rules": {}}]


def test_run_axe_error_payload_is_engine_error() -> None:
    with pytest.raises(EngineError, match="axe not loaded"):
        Document(FakePage({"error": "axe not loaded"})).run_axe("root", {})


def test_run_axe_unexpected_result_is_engine_error() -> None:
    with pytest.raises(EngineError, match="unexpected axe result"):
        Document(FakePage("not a dict")).run_axe("root", {})


def test_run_axe_playwright_error_is_chained() -> None:
    failure = PlaywrightError("Target closed")

    with pytest.raises(EngineError, match="Target closed") as excinfo:
        Document(FakePage(failure)).run_axe("root", {})

    assert excinfo.value.__cause__ is failure


def test_contains_is_false_for_foreign_handle() -> None:
    page = FakePage(PlaywrightError("JSHandles can be evaluated only in the context they were created!"))

    assert Document(page).contains(object()) is False


def test_contains_reports_page_answer() -> None:
    assert Document(FakePage(True)).contains(object()) is True
    assert Document(FakePage(False)).contains(object()) is False


def test_inner_html_round_trip() -> None:
    page = FakePage("<p>x</p>", None)
    document = Document(page)

    assert document.inner_html == "<p>x</p>"
    document.inner_html = "<img>"
    assert page.calls[1][1] == "<img>"


def test_ensure_axe_skips_loaded_engine() -> None:
    page = FakePage(True)

    Document(page).ensure_axe()

    assert page.script_tags == []


def test_ensure_axe_injects_local_script(tmp_path: Path) -> None:
    axe_js = tmp_path / "axe.min.js"
    axe_js.write_text("window.axe = {};", encoding="utf-8")
    page = FakePage(False)

    Document(page, override_settings(axe_path=axe_js)).ensure_axe()

    assert page.script_tags == [str(axe_js)]


def test_ensure_axe_playwright_error_is_engine_error() -> None:
    failure = PlaywrightError("Execution context was destroyed")

    with pytest.raises(EngineError, match="Could not load axe-core") as excinfo:
        Document(FakePage(failure)).ensure_axe()

    assert excinfo.value.__cause__ is failure
