import copy
import uuid
from typing import Dict, Iterable, List, Union

SubjectCatalog = Dict[str, Dict[str, List[str]]]

MIN_SUBJECTS = 3
MAX_SUBJECTS = 10

BRANCH_SEMESTERS = {
    "BCA": 6,
    "MCA": 4,
}

DEFAULT_SUBJECTS: SubjectCatalog = {
    "BCA": {
        "1": ["Mathematics I", "Programming in C", "Computer Fundamentals", "Digital Logic", "Communication Skills"],
        "2": ["Mathematics II", "Data Structures", "OOP in C++", "Operating Systems", "Environmental Studies"],
        "3": ["DBMS", "Discrete Mathematics", "Computer Networks", "Java Programming", "Accounting Fundamentals"],
        "4": ["Software Engineering", "Web Technologies", "Computer Graphics", "Probability & Statistics", "Microprocessors"],
        "5": ["Python Programming", "Information Security", "Mobile App Dev", "AI Fundamentals", "Management Info Systems"],
        "6": ["Cloud Computing", "Project", "Data Analytics", "Elective I", "Elective II"],
    },
    "MCA": {
        "1": ["Mathematical Foundations", "Programming in C", "Computer Architecture", "DBMS", "Communication Skills"],
        "2": ["Data Structures", "Operating Systems", "OOP in Java", "Software Engineering", "Discrete Mathematics"],
        "3": ["Computer Networks", "Web Technologies", "Data Warehousing", "Elective I", "Probability & Statistics"],
        "4": ["AI & ML", "Cloud Computing", "Project", "Elective II", "Professional Ethics"],
    },
}


def default_catalog() -> SubjectCatalog:
    return copy.deepcopy(DEFAULT_SUBJECTS)


def semesters_for_branch(branch: str) -> int:
    return BRANCH_SEMESTERS.get(branch, 0)


def lookup_subject_list(catalog: SubjectCatalog, branch: str, semester: Union[int, str]) -> List[str]:
    """Subjects for (branch, semester) without touching `catalog`; defaults are copied."""
    semesters = catalog.get(branch)
    if isinstance(semesters, dict) and isinstance(semesters.get(str(semester)), list):
        return semesters[str(semester)]
    return list(DEFAULT_SUBJECTS.get(branch, {}).get(str(semester), []))


def ensure_subject_list(catalog: SubjectCatalog, branch: str, semester: Union[int, str]) -> List[str]:
    """
    Return the live subject list for (branch, semester), seeding it from the
    default catalog (or an empty list) the first time it is asked for.

    The returned list is the one stored in `catalog`, so edits made through
    it end up in the owning document.
    """
    sem_key = str(semester)
    semesters = catalog.get(branch)
    if not isinstance(semesters, dict):
        semesters = {}
        catalog[branch] = semesters

    if not isinstance(semesters.get(sem_key), list):
        defaults = DEFAULT_SUBJECTS.get(branch, {}).get(sem_key, [])
        semesters[sem_key] = list(defaults)

    return semesters[sem_key]


def generate_id(existing: Iterable[str] = ()) -> str:
    taken = set(existing)
    while True:
        candidate = uuid.uuid4().hex[:8]
        if candidate not in taken:
            return candidate
