import pytest

from src.models import StudentRecord
from src.record_store import RecordStore
from src.storage import MemoryStorage

KEY = "SRMS_TEST"


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    s = RecordStore(storage, KEY)
    s.load()
    return s


@pytest.fixture
def make_student():
    def _make(**overrides):
        fields = {
            "id": "abc12345",
            "name": "Asha Rao",
            "roll_no": "BCA-001",
            "branch": "BCA",
            "semester": "1",
            "marks": [90, 85, 72, 64, 55],
            "cgpa": 8.2,
            "grade": "A",
            "status": "Pass",
        }
        fields.update(overrides)
        return StudentRecord(**fields)
    return _make
