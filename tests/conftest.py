# tests/conftest.py
import sys
from pathlib import Path

import pendulum
import pytest

# -----------------------------------------------------------------------------
# Ensure the project root (where ontology.py lives) is importable for tests
# -----------------------------------------------------------------------------
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from moment import ResolverContext  # noqa: E402
from ontology import train_raw_parser, Parser  # noqa: E402


@pytest.fixture(scope="session")
def en_raw():
    """English rules + scorer trained once for the whole run."""
    return train_raw_parser("en")


@pytest.fixture(scope="session")
def en_parser(en_raw):
    return Parser(en_raw)


@pytest.fixture
def ctx():
    # Tuesday 2013-02-12 04:30 UTC
    return ResolverContext(reference_time=pendulum.datetime(2013, 2, 12, 4, 30, tz="UTC"))
