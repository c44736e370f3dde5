import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Union

import numpy as np

MAX_MARKS_PER_SUBJECT = 100
PASS_MARKS_PER_SUBJECT = 35

# (lower bound, grade point), checked top-down
GRADE_POINT_BANDS = [
    (90, 10),
    (80, 9),
    (70, 8),
    (60, 7),
    (50, 6),
    (40, 5),
]

LETTER_GRADES = ["A+", "A", "B+", "B", "C", "D", "F"]
STATUSES = ["Pass", "Fail"]


# ------------------------
# Core logic
# ------------------------
def round_2dp_half_up(x: float) -> float:
    return float(Decimal(str(x)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def coerce_mark(value) -> float:
    """
    Turn whatever came out of a form or the stored JSON into a usable mark.
    Non-numeric and non-finite values count as 0; the result is clamped to
    [0, MAX_MARKS_PER_SUBJECT].
    """
    try:
        mark = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(mark):
        return 0.0
    return min(max(mark, 0.0), float(MAX_MARKS_PER_SUBJECT))


def grade_point_from_marks(mark) -> int:
    m = coerce_mark(mark)
    for lower, point in GRADE_POINT_BANDS:
        if m >= lower:
            return point
    return 0


def grade_from_cgpa(cgpa: float) -> str:
    if cgpa >= 9:
        return "A+"
    elif cgpa >= 8:
        return "A"
    elif cgpa >= 7:
        return "B+"
    elif cgpa >= 6:
        return "B"
    elif cgpa >= 5:
        return "C"
    elif cgpa > 0:
        return "D"
    else:
        return "F"


def _as_array(marks: Iterable) -> np.ndarray:
    return np.array([coerce_mark(m) for m in marks], dtype=float)


def has_backlog(marks: Iterable) -> bool:
    """True when at least one subject is below the pass mark."""
    arr = _as_array(marks)
    return bool((arr < PASS_MARKS_PER_SUBJECT).any())


def compute_result(marks: Iterable) -> Dict[str, Union[int, float, str]]:
    """
    marks: ordered marks, one per subject of the student's semester
    returns: totalMax, totalObtained, cgpa, grade, status

    A single subject under PASS_MARKS_PER_SUBJECT fails the whole result,
    whatever the cgpa.
    """
    arr = _as_array(list(marks))

    total_max = int(arr.size * MAX_MARKS_PER_SUBJECT)
    total_obtained = float(arr.sum()) if arr.size else 0.0
    if total_obtained.is_integer():
        total_obtained = int(total_obtained)

    if arr.size == 0:
        cgpa = 0.0
    else:
        points: List[int] = [grade_point_from_marks(m) for m in arr]
        cgpa = round_2dp_half_up(float(np.mean(points)))

    grade = grade_from_cgpa(cgpa)
    backlog = bool((arr < PASS_MARKS_PER_SUBJECT).any())
    status = "Fail" if backlog or grade == "F" else "Pass"

    return {
        "totalMax": total_max,
        "totalObtained": total_obtained,
        "cgpa": cgpa,
        "grade": grade,
        "status": status,
    }
