from uuid import uuid4

import pytest


@pytest.fixture
def doctor_id():
    return uuid4()


@pytest.fixture
def other_doctor_id():
    return uuid4()
