import json

import pytest

from src.catalog import DEFAULT_SUBJECTS, default_catalog
from src.record_store import RecordStore
from src.records import (
    add_subject,
    clear_all,
    delete_student,
    find_student,
    remove_subject,
    replace_subjects,
    save_student,
)
from src.validation import ValidationError, validate_student_form


def _form(name="Asha Rao", roll_no="BCA-001", branch="BCA", semester="1", marks=(90, 90, 90, 90, 20)):
    return validate_student_form(name, roll_no, branch, semester, list(marks))


def test_save_new_student_computes_result(store, storage):
    record, created = save_student(store, _form())
    assert created
    assert record.cgpa == 8.0
    assert record.grade == "A"
    assert record.status == "Fail"
    assert len(record.id) == 8

    stored = json.loads(storage.get_item(store.key))
    assert stored["students"][0]["id"] == record.id
    assert stored["students"][0]["status"] == "Fail"


def test_update_replaces_in_place(store):
    first, _ = save_student(store, _form())
    save_student(store, _form(name="Zoe", roll_no="BCA-002"))

    updated, created = save_student(store, _form(marks=(90, 90, 90, 90, 90)), editing_id=first.id)
    assert not created
    assert len(store.document.students) == 2
    assert store.document.students[0] is updated
    assert updated.status == "Pass"
    assert updated.grade == "A+"


def test_mark_count_must_match_subjects(store, storage):
    with pytest.raises(ValidationError) as exc:
        save_student(store, _form(marks=(50, 60)))
    assert "subjects" in exc.value.errors
    assert store.document.students == []
    assert storage.get_item(store.key) is None


def test_find_and_delete(store):
    record, _ = save_student(store, _form())
    assert find_student(store, record.id) is record
    assert find_student(store, "missing") is None

    assert delete_student(store, record.id)
    assert not delete_student(store, record.id)
    assert store.document.students == []


def test_clear_all(store, storage):
    save_student(store, _form())
    add_subject(store, "BCA", "1", "Yoga")

    doc = clear_all(store)
    assert doc.students == []
    assert doc.subjects == default_catalog()
    assert json.loads(storage.get_item(store.key))["subjects"] == default_catalog()


def test_add_subject(store):
    subjects = add_subject(store, "MCA", 4, " Research Methods ")
    assert subjects[-1] == "Research Methods"
    assert len(subjects) == 6
    assert store.document.subjects["MCA"]["4"] is subjects


def test_add_subject_limit(store):
    for i in range(5):
        add_subject(store, "BCA", "2", f"Extra {i}")
    with pytest.raises(ValidationError):
        add_subject(store, "BCA", "2", "One too many")
    assert len(store.subjects_for("BCA", "2")) == 10


def test_add_subject_needs_selection(store):
    before = store.document.model_copy(deep=True)
    with pytest.raises(ValidationError):
        add_subject(store, "", "", "Yoga")
    assert store.document == before


def test_remove_subject(store):
    subjects = remove_subject(store, "BCA", "1", 0)
    assert subjects == DEFAULT_SUBJECTS["BCA"]["1"][1:]
    with pytest.raises(IndexError):
        remove_subject(store, "BCA", "1", 10)


def test_replace_subjects_keeps_list_identity(store):
    live = store.subjects_for("BCA", "6")
    out = replace_subjects(store, "BCA", "6", ["Cloud", " ", "Project", "Thesis"])
    assert out is live
    assert live == ["Cloud", "Project", "Thesis"]


def test_replace_subjects_invalid_leaves_catalog(store):
    before = list(store.subjects_for("BCA", "6"))
    with pytest.raises(ValidationError):
        replace_subjects(store, "BCA", "6", ["Only", "Two"])
    assert store.subjects_for("BCA", "6") == before


def test_student_marks_follow_custom_subjects(store):
    replace_subjects(store, "MCA", "1", ["A", "B", "C"])
    record, _ = save_student(store, _form(branch="MCA", marks=(40, 50, 60)))
    assert record.cgpa == 6.0
    assert record.grade == "B"


@pytest.fixture
def bare_store(storage):
    storage.set_item("SRMS_BARE", json.dumps({"students": [], "subjects": {}}))
    s = RecordStore(storage, "SRMS_BARE")
    s.load()
    return s


def test_rejected_student_leaves_empty_catalog_alone(bare_store):
    before = bare_store.document.model_copy(deep=True)
    with pytest.raises(ValidationError):
        save_student(bare_store, _form(marks=(50, 60)))
    assert bare_store.document == before
    assert bare_store.document.subjects == {}


def test_rejected_subject_leaves_empty_catalog_alone(bare_store):
    before = bare_store.document.model_copy(deep=True)
    with pytest.raises(ValidationError):
        add_subject(bare_store, "MCA", "2", "   ")
    assert bare_store.document == before


def test_accepted_student_pins_default_subjects(bare_store):
    save_student(bare_store, _form())
    assert bare_store.document.subjects == {"BCA": {"1": DEFAULT_SUBJECTS["BCA"]["1"]}}
