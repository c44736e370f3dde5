import json
from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from src.config import CONFIG

APP = str(Path(__file__).resolve().parents[1] / "app.py")


@pytest.fixture
def data_dir(tmp_path, monkeypatch, make_student):
    monkeypatch.setattr(CONFIG, "DATA_DIR", str(tmp_path))
    doc = {"students": [make_student().model_dump(by_alias=True)]}
    (tmp_path / f"{CONFIG.STORAGE_KEY}.json").write_text(json.dumps(doc), encoding="utf-8")
    return tmp_path


def _stored_ids(data_dir):
    raw = json.loads((data_dir / f"{CONFIG.STORAGE_KEY}.json").read_text(encoding="utf-8"))
    return [s["id"] for s in raw["students"]]


def _open_record(student_id):
    at = AppTest.from_file(APP, default_timeout=30)
    at.run()
    at.selectbox(key="editing_choice").set_value(student_id).run()
    return at


def test_delete_needs_confirmation(data_dir):
    at = _open_record("abc12345")
    assert at.button(key="delete_abc12345").disabled
    assert _stored_ids(data_dir) == ["abc12345"]


def test_confirmed_delete_removes_record(data_dir):
    at = _open_record("abc12345")
    at.checkbox(key="confirm_delete_abc12345").check().run()
    assert not at.button(key="delete_abc12345").disabled

    at.button(key="delete_abc12345").click().run()
    assert _stored_ids(data_dir) == []
