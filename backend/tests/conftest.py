from datetime import date

import pytest

from tests.factories import FakeRecordStore

TODAY = date(2026, 2, 27)


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def store():
    return FakeRecordStore()
