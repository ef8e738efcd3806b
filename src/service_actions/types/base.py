"""Base model for records, deltas and run results."""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict


class ActionsBaseModel(BaseModel):
    """Frozen pydantic model.

    Records handed out by the extractor or the snapshot loader are never
    modified in place; derived values are new instances. Unknown fields
    are rejected.
    """
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-compatible dictionary: enums as values, tuples as lists."""
        return self.model_dump(mode="json")
