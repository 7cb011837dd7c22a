"""Load change batches from JSON documents."""

from __future__ import annotations

from typing import TYPE_CHECKING

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from tunnelsync.domain.types import ChangeBatch, DesiredRecord, RecordType

if TYPE_CHECKING:
    from pathlib import Path


class ChangesFileError(ValueError):
    """Raised when a change batch document cannot be read or validated."""


class RecordPayload(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    name: str = Field(min_length=1)
    record_type: RecordType = Field(default=RecordType.A, alias="recordType")
    targets: list[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _normalize_name(cls, value: str) -> str:
        return value.strip().rstrip(".")

    def to_domain(self) -> DesiredRecord:
        return DesiredRecord(
            name=self.name, targets=tuple(self.targets), record_type=self.record_type
        )


class ChangeBatchPayload(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    create: list[RecordPayload] = Field(default_factory=list)
    update_old: list[RecordPayload] = Field(default_factory=list, alias="updateOld")
    update_new: list[RecordPayload] = Field(default_factory=list, alias="updateNew")
    delete: list[RecordPayload] = Field(default_factory=list)

    @model_validator(mode="after")
    def _require_targets(self) -> ChangeBatchPayload:
        # deletes and update_old only need the name
        missing = [r.name for r in (*self.create, *self.update_new) if not r.targets]
        if missing:
            raise ValueError(f"records without targets: {', '.join(missing)}")
        return self

    def to_domain(self) -> ChangeBatch:
        return ChangeBatch(
            create=tuple(record.to_domain() for record in self.create),
            update_old=tuple(record.to_domain() for record in self.update_old),
            update_new=tuple(record.to_domain() for record in self.update_new),
            delete=tuple(record.to_domain() for record in self.delete),
        )


def parse_change_batch(document: str | bytes) -> ChangeBatch:
    try:
        payload = ChangeBatchPayload.model_validate_json(document)
    except ValidationError as exc:
        raise ChangesFileError(f"Invalid change batch: {exc}") from exc
    return payload.to_domain()


def load_change_batch(path: Path) -> ChangeBatch:
    """Read a change batch from ``path``.

    The document holds ``create``, ``update_old``, ``update_new`` and ``delete``
    lists of ``{"name", "record_type", "targets"}`` records; every list is optional.
    """

    try:
        document = path.read_bytes()
    except OSError as exc:
        raise ChangesFileError(f"Cannot read change batch {path}: {exc}") from exc
    return parse_change_batch(document)
