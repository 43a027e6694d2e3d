from __future__ import annotations

from ..common.validators import require_non_empty, require_positive_int, require_subject_type
from ..core.exceptions import ValidationError
from ..store.store import Store
from . import reducers
from .model import Subject


class SubjectService:
    def __init__(self, store: Store):
        self._store = store

    def list(self) -> list[Subject]:
        return sorted(self._store.state.subjects, key=lambda s: s.name.lower())

    def add(self, *, name: str, subject_type: str, credits) -> Subject:
        subject = Subject(
            id=self._store.new_id(),
            name=require_non_empty(name, "Subject name"),
            type=require_subject_type(subject_type),
            credits=require_positive_int(credits, "Credits"),
        )
        self._store.apply(reducers.add_subject, subject)
        return subject

    def update(self, *, subject_id: str, name: str, subject_type: str, credits) -> Subject:
        if self._store.state.subject_by_id(subject_id) is None:
            raise ValidationError("Subject not found")

        subject = Subject(
            id=subject_id,
            name=require_non_empty(name, "Subject name"),
            type=require_subject_type(subject_type),
            credits=require_positive_int(credits, "Credits"),
        )
        self._store.apply(reducers.update_subject, subject)
        return subject

    def delete(self, *, subject_id: str) -> None:
        if self._store.state.subject_by_id(subject_id) is None:
            raise ValidationError("Subject not found")
        self._store.apply(reducers.delete_subject, subject_id)
