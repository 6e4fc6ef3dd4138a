"""Shared fixtures and markers for ELIZA tests."""

import pytest

from eliza.engine.session import Eliza
from eliza.script.doctor import CACM_1966_01_DOCTOR_SCRIPT
from eliza.script.loader import load


def pytest_configure(config):
    config.addinivalue_line("markers", "lmdb: writes an LMDB session store under tmp_path")
    config.addinivalue_line("markers", "transcript: replays a published 1966 conversation")


@pytest.fixture(scope="session")
def doctor():
    """The DOCTOR script, loaded once; scripts are never modified."""
    return load(CACM_1966_01_DOCTOR_SCRIPT)


@pytest.fixture
def eliza(doctor):
    """A fresh conversation with DOCTOR."""
    return Eliza(doctor)
