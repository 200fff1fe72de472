from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from .errors import MissingViolationsFieldError
from .formatter import HORIZONTAL_LINE, format_violations
from .utils import report_stamp, safe_filename

logger = logging.getLogger(__name__)

NO_VIOLATIONS = "No violations found!"


class BestEffortSink:
    """Writes text to disk and never lets an I/O failure escape."""

    def write(self, path, text: str, append: bool = False) -> bool:
        path = Path(path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("a" if append else "w", encoding="utf-8") as fh:
                fh.write(text)
        except (OSError, ValueError) as e:
            logger.warning("Could not write accessibility report to %s: %s", path, e)
            return False
        return True


sink = BestEffortSink()


def get_violations(results: Any) -> Sequence[Any]:
    if isinstance(results, Mapping):
        violations = results.get("violations")
    else:
        violations = getattr(results, "violations", None)
    if violations is None:
        raise MissingViolationsFieldError()
    return violations


def engine_version(results: Any) -> str:
    engine = results.get("testEngine") if isinstance(results, Mapping) else getattr(results, "testEngine", None)
    if isinstance(engine, Mapping) and engine.get("version"):
        return str(engine["version"])
    return "unknown"


def report_header(version: str, moment: Optional[datetime] = None) -> str:
    moment = moment or datetime.now()
    return (
        f"{HORIZONTAL_LINE}\n{HORIZONTAL_LINE}\n\n"
        f"Report Date: {moment.isoformat(timespec='seconds')}\n\n"
        f"Axe-Core Version: {version}\n"
        f"{HORIZONTAL_LINE}\n\n"
    )


def build_report(results: Any, header: bool = False) -> str:
    body = format_violations(get_violations(results), verbose=True)
    if not body:
        return NO_VIOLATIONS
    if header:
        return report_header(engine_version(results)) + body + "\n"
    return body


def report_violations(results: Any, path, append: bool = False, *, header: bool = False) -> None:
    """Write the violations in ``results`` to ``path`` as plain text.

    Write errors are logged and dropped; a results object without
    ``violations`` raises.
    """
    sink.write(path, build_report(results, header=header), append=append)


def timestamped_report_path(directory, label: Optional[str] = None) -> Path:
    return Path(directory) / f"{safe_filename(label)}-{report_stamp()}.txt"
