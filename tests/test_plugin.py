from __future__ import annotations

from pathlib import Path

from axe_assertions import plugin
from axe_assertions.config import get_settings


class _Config:
    def __init__(self, option=None, ini=""):
        self.option = option
        self.ini = ini

    def getoption(self, name):
        assert name == "--axe-reports-dir"
        return self.option

    def getini(self, name):
        assert name == "axe_reports_dir"
        return self.ini


def test_command_line_reports_dir_wins(tmp_path: Path) -> None:
    plugin.pytest_configure(_Config(option=str(tmp_path / "cli"), ini=str(tmp_path / "ini")))

    assert get_settings().reports_dir == tmp_path / "cli"


def test_ini_reports_dir_is_used(tmp_path: Path) -> None:
    plugin.pytest_configure(_Config(ini=str(tmp_path / "ini")))

    assert get_settings().reports_dir == tmp_path / "ini"


def test_reports_dir_untouched_without_configuration(reports_dir) -> None:
    plugin.pytest_configure(_Config())

    assert get_settings().reports_dir == reports_dir
