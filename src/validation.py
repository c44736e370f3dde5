from typing import Dict, Iterable, List, Union

from src.catalog import BRANCH_SEMESTERS, MAX_SUBJECTS, MIN_SUBJECTS, semesters_for_branch
from src.grading import coerce_mark
from src.models import StudentForm


class ValidationError(ValueError):
    """Field-level problems with user input; `errors` maps field -> message."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(f"{field}: {msg}" for field, msg in self.errors.items()))


def _text(value) -> str:
    return "" if value is None else str(value).strip()


def _form_mark(value) -> Union[int, float]:
    mark = coerce_mark(value)
    return int(mark) if mark.is_integer() else mark


def validate_student_form(name, roll_no, branch, semester, marks: Iterable) -> StudentForm:
    """
    Check the add/edit form and return the cleaned values.
    Every problem is collected before raising so the form can show them all.
    """
    name = _text(name)
    roll_no = _text(roll_no)
    branch = _text(branch)
    semester = _text(semester)
    cleaned_marks = [_form_mark(m) for m in marks]

    errors: Dict[str, str] = {}
    if not name:
        errors["name"] = "Name is required"
    if not roll_no:
        errors["rollNo"] = "Roll number is required"

    if not branch:
        errors["branch"] = "Select branch"
    elif branch not in BRANCH_SEMESTERS:
        errors["branch"] = f"Unknown branch {branch!r}"

    if not semester:
        errors["semester"] = "Select semester"
    elif branch in BRANCH_SEMESTERS:
        if not semester.isdigit() or not 1 <= int(semester) <= semesters_for_branch(branch):
            errors["semester"] = f"{branch} has no semester {semester}"
        else:
            semester = str(int(semester))

    if not cleaned_marks:
        errors["subjects"] = "No subjects configured for this semester"

    if errors:
        raise ValidationError(errors)

    return StudentForm(
        name=name,
        roll_no=roll_no,
        branch=branch,
        semester=semester,
        marks=cleaned_marks,
    )


def validate_subject_names(branch, semester, names: Iterable) -> List[str]:
    if not _text(branch):
        raise ValidationError({"branch": "Select branch"})
    if not _text(semester):
        raise ValidationError({"semester": "Select semester"})

    cleaned = [n for n in (_text(name) for name in names) if n]
    if len(cleaned) < MIN_SUBJECTS:
        raise ValidationError({"subjects": f"Please keep at least {MIN_SUBJECTS} subjects"})
    if len(cleaned) > MAX_SUBJECTS:
        raise ValidationError({"subjects": f"Limit to {MAX_SUBJECTS} subjects"})
    return cleaned


def validate_new_subject(branch, semester, name, current: List[str]) -> str:
    if not _text(branch) or not _text(semester):
        raise ValidationError({"subjects": "Select branch and semester"})
    name = _text(name)
    if not name:
        raise ValidationError({"newSubject": "Enter subject name"})
    if len(current) >= MAX_SUBJECTS:
        raise ValidationError({"subjects": f"Max {MAX_SUBJECTS} subjects allowed"})
    return name
