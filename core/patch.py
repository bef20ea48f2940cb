# core/patch.py
"""
Tri-state field support for partial updates.

A patch field is either UNSET (leave the column alone), None (clear it) or a
value (overwrite it). Request models only tell us which keys the client sent,
so patches are built from `model_fields_set` rather than from `is None` checks.
"""
from dataclasses import fields
from typing import Any

from pydantic import BaseModel


class _Unset:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Any = _Unset()


def is_set(value: Any) -> bool:
    return value is not UNSET


class PatchMixin:
    """Shared helpers for dataclass patches whose fields default to UNSET."""

    @classmethod
    def from_model(cls, payload: BaseModel):
        sent = payload.model_fields_set
        names = {f.name for f in fields(cls)}
        return cls(**{name: getattr(payload, name) for name in sent if name in names})

    def changes(self) -> dict[str, Any]:
        """Only the fields that were supplied, with their (possibly None) values."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if is_set(getattr(self, f.name))
        }

    def is_empty(self) -> bool:
        return not self.changes()
