from .config import Settings, get_settings, override_settings, reset_settings
from .document import Document, default_document
from .errors import AxeAssertionError, EngineError, InvalidInputError, MissingViolationsFieldError
from .formatter import format_violations, matcher_hint
from .matchers import (
    AxeExpectation,
    MatcherOptions,
    MatcherResult,
    expect,
    resolve_options,
    to_audit_no_violations,
    to_have_no_violations,
)
from .mount import mount, mounted
from .report import report_violations, timestamped_report_path
from .scanner import configure_axe

__version__ = "0.1.0"

axe = configure_axe()

__all__ = [
    "AxeAssertionError",
    "AxeExpectation",
    "Document",
    "EngineError",
    "InvalidInputError",
    "MatcherOptions",
    "MatcherResult",
    "MissingViolationsFieldError",
    "Settings",
    "axe",
    "configure_axe",
    "default_document",
    "expect",
    "format_violations",
    "get_settings",
    "matcher_hint",
    "mount",
    "mounted",
    "override_settings",
    "report_violations",
    "reset_settings",
    "resolve_options",
    "timestamped_report_path",
    "to_audit_no_violations",
    "to_have_no_violations",
]
