import pytest

from factories import make_patient, sequential_ids


@pytest.fixture
def ids():
    """Deterministic identifier source."""
    return sequential_ids("test")


@pytest.fixture
def adult():
    return make_patient(age=40)


@pytest.fixture
def elderly():
    return make_patient(age=70)
