"""
pytest bridge for the script-style suites.

Each test module defines its own TestRunner and ``test_*(runner)``
functions so it can run standalone with ``python3 test_x.py``. Under pytest
the ``runner`` fixture hands every test a fresh runner and fails the test
if any of its checks failed.
"""
import pytest


@pytest.fixture
def runner(request):
    test_runner = request.module.TestRunner()
    yield test_runner
    assert test_runner.failed == 0, "; ".join(test_runner.errors)
