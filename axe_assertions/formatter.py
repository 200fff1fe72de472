from __future__ import annotations

from typing import Any, Mapping, Sequence

from rich.console import Console

LINE_BREAK = "\n\n"
HORIZONTAL_LINE = "─" * 8

_console = Console(force_terminal=True, color_system="standard", no_color=False, highlight=False,
                   soft_wrap=True, emoji=False)


def paint(text: str, style: str, color: bool = True) -> str:
    if not color or not text:
        return text
    with _console.capture() as capture:
        _console.print(text, style=style, markup=False, end="")
    return capture.get()


def matcher_hint(name: str, color: bool = False) -> str:
    return (
        paint("expect(", "dim", color)
        + paint("received", "red", color)
        + paint(f"){name}()", "dim", color)
    )


def _segment(segment: Any) -> str:
    # iframe and shadow DOM targets nest the selector path one level down
    if isinstance(segment, (list, tuple)):
        return ",".join(_segment(part) for part in segment)
    return str(segment)


def _format_node(violation: Mapping[str, Any], node: Mapping[str, Any], verbose: bool, color: bool) -> str:
    selector = ", ".join(_segment(part) for part in node["target"])
    text = (
        f"Expected the HTML found at $('{selector}') to have no violations:"
        + LINE_BREAK
        + paint(node["html"], "bright_black", color)
        + LINE_BREAK
        + "Received:"
        + LINE_BREAK
        + paint(f"{violation['help']} ({violation['id']})", "red", color)
    )
    if not verbose:
        return text
    return (
        text
        + LINE_BREAK
        + paint(node.get("failureSummary") or "", "yellow", color)
        + LINE_BREAK
        + "You can find more information on this issue here: \n"
        + paint(violation["helpUrl"], "blue", color)
    )


def format_violations(violations: Sequence[Mapping[str, Any]], verbose: bool = True, color: bool = False) -> str:
    """Render violations as text, one block per offending node.

    Returns an empty string when there is nothing to report.
    """
    if not violations:
        return ""
    return (LINE_BREAK + HORIZONTAL_LINE + LINE_BREAK).join(
        LINE_BREAK.join(_format_node(v, node, verbose, color) for node in v["nodes"])
        for v in violations
    )
