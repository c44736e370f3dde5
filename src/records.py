from typing import List, Optional, Tuple, Union

from src.catalog import default_catalog, generate_id, lookup_subject_list
from src.grading import compute_result
from src.logger import get_logger
from src.models import StoreDocument, StudentForm, StudentRecord
from src.record_store import RecordStore
from src.validation import ValidationError, validate_new_subject, validate_subject_names

logger = get_logger("records")


# ------------------------
# Students
# ------------------------

def find_student(store: RecordStore, student_id: str) -> Optional[StudentRecord]:
    for student in store.document.students:
        if student.id == student_id:
            return student
    return None


def save_student(
    store: RecordStore,
    form: StudentForm,
    editing_id: Optional[str] = None,
) -> Tuple[StudentRecord, bool]:
    """
    Create or update a student result from a validated form.
    returns: (saved record, True if it was newly created)
    """
    subjects = lookup_subject_list(store.document.subjects, form.branch, form.semester)
    if len(form.marks) != len(subjects):
        raise ValidationError(
            {"subjects": f"Expected {len(subjects)} marks for {form.branch} semester {form.semester}, got {len(form.marks)}"}
        )
    # pin the list the marks were checked against
    store.subjects_for(form.branch, form.semester)

    students = store.document.students
    result = compute_result(form.marks)
    record = StudentRecord(
        id=editing_id or generate_id(s.id for s in students),
        name=form.name,
        roll_no=form.roll_no,
        branch=form.branch,
        semester=form.semester,
        marks=list(form.marks),
        cgpa=result["cgpa"],
        grade=result["grade"],
        status=result["status"],
    )

    idx = next((i for i, s in enumerate(students) if s.id == record.id), None)
    if idx is None:
        students.append(record)
    else:
        students[idx] = record
    store.save()

    created = idx is None
    logger.info("%s student %s (%s)", "Added" if created else "Updated", record.id, record.roll_no)
    return record, created


def delete_student(store: RecordStore, student_id: str) -> bool:
    before = len(store.document.students)
    store.document.students = [s for s in store.document.students if s.id != student_id]
    removed = len(store.document.students) != before
    if removed:
        store.save()
        logger.info("Deleted student %s", student_id)
    return removed


def clear_all(store: RecordStore) -> StoreDocument:
    store.save(StoreDocument(students=[], subjects=default_catalog()))
    logger.info("Cleared all students and custom subjects")
    return store.document


# ------------------------
# Subjects
# ------------------------

def add_subject(store: RecordStore, branch: str, semester: Union[int, str], name: str) -> List[str]:
    selected = str(branch or "").strip() and str(semester or "").strip()
    current = lookup_subject_list(store.document.subjects, branch, semester) if selected else []
    name = validate_new_subject(branch, semester, name, current)
    subjects = store.subjects_for(branch, semester)
    subjects.append(name)
    store.save()
    return subjects


def remove_subject(store: RecordStore, branch: str, semester: Union[int, str], index: int) -> List[str]:
    subjects = store.subjects_for(branch, semester)
    if not 0 <= index < len(subjects):
        raise IndexError(f"No subject at position {index} for {branch} semester {semester}")
    del subjects[index]
    store.save()
    return subjects


def replace_subjects(store: RecordStore, branch: str, semester: Union[int, str], names) -> List[str]:
    cleaned = validate_subject_names(branch, semester, names)
    subjects = store.subjects_for(branch, semester)
    subjects[:] = cleaned
    store.save()
    logger.info("Saved %d subjects for %s semester %s", len(cleaned), branch, semester)
    return subjects
