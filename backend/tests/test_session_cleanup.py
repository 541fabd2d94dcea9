from __future__ import annotations

import re
from pathlib import Path

CONFTEST = Path(__file__).with_name("conftest.py")
PROJECT_ROOT = Path(__file__).resolve().parents[2]


def test_startup_database_directory_removed_after_session(pytester, monkeypatch) -> None:
    monkeypatch.setenv("PYTHONPATH", str(PROJECT_ROOT))
    pytester.makeconftest(CONFTEST.read_text(encoding="utf-8"))
    pytester.makepyfile(
        test_startup_database="""
        import os

        def test_reports_startup_database():
            print("STARTUP_DATABASE_URL=" + os.environ["DATABASE_URL"])
        """
    )

    result = pytester.runpytest_subprocess("-s", "-p", "no:cacheprovider")

    result.assert_outcomes(passed=1)
    match = re.search(r"STARTUP_DATABASE_URL=sqlite:///(\S+)", result.stdout.str())
    assert match is not None
    startup_dir = Path(match.group(1)).parent
    assert startup_dir.name.startswith("tax_guard_tests_")
    assert not startup_dir.exists()
