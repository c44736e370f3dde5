import json
from typing import Any, List, Optional, Union

import pydantic

from src.catalog import SubjectCatalog, default_catalog, ensure_subject_list
from src.config import CONFIG, data_dir
from src.logger import get_logger
from src.models import StoreDocument, StudentRecord
from src.storage import FileStorage

logger = get_logger("record_store")


# ------------------------
# Normalization (load boundary)
# ------------------------

def _normalise_catalog(raw: dict) -> SubjectCatalog:
    catalog: SubjectCatalog = {}
    for branch, semesters in raw.items():
        if not isinstance(semesters, dict):
            logger.warning("Dropping subjects for branch %r: not a mapping", branch)
            continue
        catalog[str(branch)] = {
            str(sem): [str(name) for name in names]
            for sem, names in semesters.items()
            if isinstance(names, list)
        }
    return catalog


def _normalise_students(raw: list) -> List[StudentRecord]:
    records = []
    for idx, entry in enumerate(raw):
        try:
            records.append(StudentRecord.model_validate(entry))
        except pydantic.ValidationError as e:
            logger.warning("Dropping student entry %d: %s", idx, e.errors()[0].get("msg"))
    return records


def normalize_document(raw: Any) -> StoreDocument:
    """
    Repair whatever was found in storage into a StoreDocument.
    Anything with the wrong shape is treated as absent; nothing is raised.
    """
    if isinstance(raw, StoreDocument):
        raw = raw.to_json_dict()
    if not isinstance(raw, dict):
        return StoreDocument()

    students = raw.get("students")
    if not isinstance(students, list):
        if students is not None:
            logger.warning("Stored 'students' is not a list, discarding it")
        students = []

    subjects = raw.get("subjects")
    if isinstance(subjects, dict):
        catalog = _normalise_catalog(subjects)
    else:
        if subjects is not None:
            logger.warning("Stored 'subjects' is not a mapping, using the default catalog")
        catalog = default_catalog()

    return StoreDocument(students=_normalise_students(students), subjects=catalog)


# ------------------------
# Store
# ------------------------

class RecordStore:
    """
    Sole owner of the StoreDocument for a session. Pass the instance to
    whatever needs the data instead of reaching for a global.
    """

    def __init__(self, storage, key: Optional[str] = None):
        self.storage = storage
        self.key = key or CONFIG.STORAGE_KEY
        self.document = StoreDocument()

    @classmethod
    def from_config(cls) -> "RecordStore":
        return cls(FileStorage(data_dir()), CONFIG.STORAGE_KEY)

    def load(self) -> StoreDocument:
        try:
            text = self.storage.get_item(self.key)
            raw = None if text is None else json.loads(text)
        except ValueError:
            # undecodable bytes or broken JSON
            logger.warning("Stored data under %s is unreadable, starting empty", self.key)
            raw = None
        else:
            if text is None:
                logger.info("No stored data under %s, starting empty", self.key)

        self.document = normalize_document(raw)
        return self.document

    def save(self, doc: Optional[StoreDocument] = None) -> None:
        # Storage errors propagate; the in-memory document is kept as is.
        if doc is not None:
            self.document = doc
        payload = json.dumps(self.document.to_json_dict(), ensure_ascii=False)
        self.storage.set_item(self.key, payload)
        logger.debug("Saved %d students under %s", len(self.document.students), self.key)

    def subjects_for(self, branch: str, semester: Union[int, str]) -> List[str]:
        return ensure_subject_list(self.document.subjects, branch, semester)
