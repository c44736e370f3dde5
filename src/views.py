import math
from typing import Dict, Iterable, List

import pandas as pd

from src.grading import MAX_MARKS_PER_SUBJECT, PASS_MARKS_PER_SUBJECT, compute_result
from src.models import StudentRecord

TABLE_COLUMNS = ["Roll No", "Name", "Branch", "Semester", "CGPA", "Grade", "Status", "Id"]
DETAIL_COLUMNS = ["#", "Subject", "Marks", "Max", "Pass"]


# ------------------------
# Display helpers (never persisted)
# ------------------------

def effective_result(student: StudentRecord) -> Dict:
    """
    Cached cgpa / grade / status when they are usable, otherwise
    recomputed from the marks.
    """
    cached = {"cgpa": student.cgpa, "grade": student.grade, "status": student.status}
    if any(v is None for v in cached.values()):
        fresh = compute_result(student.marks)
        cached = {k: fresh[k] if v is None else v for k, v in cached.items()}
    return cached


def filter_students(
    students: Iterable[StudentRecord],
    branch: str = "",
    semester: str = "",
    search: str = "",
) -> List[StudentRecord]:
    search = (search or "").strip().lower()
    rows = [
        s for s in students
        if (not branch or s.branch == branch)
        and (not semester or s.semester == str(semester))
        and (not search or search in s.name.lower() or search in s.roll_no.lower())
    ]
    return sorted(rows, key=lambda s: s.name.lower())


def students_table(students: Iterable[StudentRecord]) -> pd.DataFrame:
    rows = []
    for s in students:
        res = effective_result(s)
        rows.append({
            "Roll No": s.roll_no,
            "Name": s.name,
            "Branch": s.branch,
            "Semester": s.semester,
            "CGPA": float(res["cgpa"]),
            "Grade": res["grade"],
            "Status": res["status"],
            "Id": s.id,
        })
    return pd.DataFrame(rows, columns=TABLE_COLUMNS)


def summary_stats(students: Iterable[StudentRecord]) -> Dict:
    df = students_table(students)
    total = len(df)
    if total == 0:
        return {"students": 0, "average_cgpa": 0.0, "pass_rate": 0}

    passed = int((df["Status"] == "Pass").sum())
    return {
        "students": total,
        "average_cgpa": float(df["CGPA"].mean()),
        # half-up, like the percentage shown in the header
        "pass_rate": int(math.floor(passed * 100 / total + 0.5)),
    }


def student_detail(student: StudentRecord, subjects: List[str]) -> pd.DataFrame:
    rows = []
    for i, name in enumerate(subjects):
        obtained = student.marks[i] if i < len(student.marks) else 0
        rows.append({
            "#": i + 1,
            "Subject": name,
            "Marks": obtained,
            "Max": MAX_MARKS_PER_SUBJECT,
            "Pass": obtained >= PASS_MARKS_PER_SUBJECT,
        })
    return pd.DataFrame(rows, columns=DETAIL_COLUMNS)
