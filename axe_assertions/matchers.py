from __future__ import annotations

import dataclasses
import logging
import warnings
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

from rich.console import Console
from rich.text import Text

from .config import get_settings
from .formatter import format_violations, matcher_hint
from .report import get_violations, report_violations, timestamped_report_path

logger = logging.getLogger(__name__)

_diagnostics = Console(stderr=True, highlight=False, soft_wrap=True, emoji=False)


@dataclass(frozen=True)
class MatcherOptions:
    error: bool = True
    verbose: bool = True
    report: bool = True


@dataclass
class MatcherResult:
    passed: bool
    message: Callable[[], Optional[str]]
    actual: Any = None


_OPTION_NAMES = tuple(f.name for f in dataclasses.fields(MatcherOptions))


def resolve_options(*args: Any, _stacklevel: int = 2, **kwargs: Any) -> MatcherOptions:
    """Normalize every supported calling form into one ``MatcherOptions``.

    Accepted forms: nothing, an options object (``MatcherOptions`` or a
    mapping), keyword arguments, or the deprecated positional booleans
    ``(error, verbose)``.
    """
    if args and isinstance(args[0], bool):
        if len(args) > 2:
            raise TypeError("expected at most two positional flags: error, verbose")
        warnings.warn(
            "positional error/verbose flags are deprecated; pass error=/verbose= instead",
            DeprecationWarning,
            stacklevel=_stacklevel,
        )
        return _from_mapping(dict(zip(("error", "verbose"), args)), kwargs)

    if len(args) > 1:
        raise TypeError("expected a single options object")
    if not args or args[0] is None:
        return _from_mapping({}, kwargs)
    options = args[0]
    if isinstance(options, MatcherOptions):
        return dataclasses.replace(options, **_checked(kwargs))
    if isinstance(options, Mapping):
        return _from_mapping(options, kwargs)
    raise TypeError(f"unsupported matcher options: {options!r}")


def _checked(values: Mapping[str, Any]) -> dict:
    unknown = sorted(set(values) - set(_OPTION_NAMES))
    if unknown:
        raise TypeError(f"unknown matcher option(s): {', '.join(unknown)}")
    return {key: bool(value) for key, value in values.items()}


def _from_mapping(options: Mapping[str, Any], overrides: Mapping[str, Any]) -> MatcherOptions:
    return MatcherOptions(**{**_checked(options), **_checked(overrides)})


def emit_diagnostic(message: str) -> None:
    _diagnostics.print(Text.from_ansi(message))


def write_timestamped_report(results: Any) -> None:
    path = timestamped_report_path(get_settings().reports_dir)
    report_violations(results, path, append=False, header=True)
    logger.debug("Accessibility report written to %s", path)


def to_have_no_violations(results: Any, *args: Any, _stacklevel: int = 2, **kwargs: Any) -> MatcherResult:
    """Check axe results for violations.

    With ``error=False`` the check always passes and the violations are
    printed instead; ``verbose=False`` drops failure summaries and help
    links; ``report=False`` skips the report file.
    """
    options = resolve_options(*args, _stacklevel=_stacklevel + 1, **kwargs)
    color = get_settings().color

    if options.report:
        write_timestamped_report(results)

    violations = get_violations(results)
    formatted = format_violations(violations, verbose=options.verbose, color=color)
    passed = formatted == "" if options.error else True

    def message() -> Optional[str]:
        if passed and options.error:
            return None
        return matcher_hint(".to_have_no_violations", color) + "\n\n" + formatted

    if not options.error:
        emit_diagnostic(message())

    return MatcherResult(passed=passed, message=message, actual=violations)


def to_audit_no_violations(results: Any) -> MatcherResult:
    """Like ``to_have_no_violations`` but never fails; the report is printed."""
    violations = get_violations(results)
    color = get_settings().color
    formatted = format_violations(violations, verbose=True, color=color)

    def message() -> str:
        return matcher_hint(".to_audit_no_violations", color) + "\n\n" + formatted

    emit_diagnostic(message())
    return MatcherResult(passed=True, message=message, actual=violations)


class AxeExpectation:
    def __init__(self, results: Any):
        self.results = results

    def to_have_no_violations(self, *args: Any, **kwargs: Any) -> None:
        outcome = to_have_no_violations(self.results, *args, _stacklevel=3, **kwargs)
        if not outcome.passed:
            raise AssertionError(outcome.message())

    def not_to_have_no_violations(self, *args: Any, **kwargs: Any) -> None:
        outcome = to_have_no_violations(self.results, *args, _stacklevel=3, **kwargs)
        if outcome.passed:
            color = get_settings().color
            raise AssertionError(
                matcher_hint(".not_to_have_no_violations", color)
                + "\n\n"
                + "Expected the HTML to have violations, but none were found."
            )

    def to_audit_no_violations(self) -> None:
        to_audit_no_violations(self.results)


def expect(results: Any) -> AxeExpectation:
    return AxeExpectation(results)
