"""
Shared pytest fixtures for poissonscheduler tests.
"""

import logging
from pathlib import Path

import pytest

from poissonscheduler import Instant, SimulatedClock


class ScriptedRandomSource:
    """Replays a fixed list of uniform draws, then fails like a drained source."""

    def __init__(self, draws):
        self._draws = list(draws)
        self.calls = 0

    def random(self) -> float:
        if self.calls >= len(self._draws):
            raise RuntimeError("scripted random source exhausted")
        value = self._draws[self.calls]
        self.calls += 1
        return value


@pytest.fixture
def scripted_source():
    """Factory fixture: ``scripted_source([0.1, 0.5])`` returns a replaying source."""
    return ScriptedRandomSource


@pytest.fixture
def sim_clock() -> SimulatedClock:
    """A logical clock parked at the epoch."""
    return SimulatedClock(Instant.Epoch)


@pytest.fixture(scope="session")
def test_output_root() -> Path:
    """
    Returns the root test_output directory. Created once per test session.
    Files here persist after tests complete for easy access.
    """
    output_dir = Path(__file__).parent.parent / "test_output"
    output_dir.mkdir(exist_ok=True)
    return output_dir


@pytest.fixture
def test_output_dir(request, test_output_root) -> Path:
    """
    Returns a directory for the current test to write output files.
    Directory structure: test_output/<module_name>/<test_name>/
    """
    module_name = request.module.__name__.split(".")[-1]
    test_dir = test_output_root / module_name / request.node.name
    test_dir.mkdir(parents=True, exist_ok=True)
    return test_dir


@pytest.fixture(autouse=True)
def reset_poissonscheduler_logging():
    """Give every test a silent library logger inheriting its level."""
    logger = logging.getLogger("poissonscheduler")

    def _reset():
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
            if not isinstance(handler, logging.NullHandler):
                handler.close()
        logger.addHandler(logging.NullHandler())
        logger.setLevel(logging.NOTSET)

    _reset()
    yield
    _reset()
