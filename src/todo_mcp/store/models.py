"""Todo record models — the domain objects owned by the record store."""

from datetime import UTC, datetime
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class TodoRecord(BaseModel):
    """A single todo item.

    Records are immutable; an update produces a new instance with the same
    ``id`` and a fresh ``updated_at``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(default_factory=lambda: str(uuid4()))
    title: str
    completed: bool = False
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC), alias="updatedAt")

    def to_wire(self) -> dict[str, object]:
        """Serialise with wire (camelCase) field names."""
        return self.model_dump(mode="json", by_alias=True)


class TodoPatch(BaseModel):
    """A partial update. ``None`` fields leave the record unchanged."""

    title: str | None = None
    completed: bool | None = None
