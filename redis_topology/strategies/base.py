from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Strategy(BaseModel):
    """Base for pluggable policy objects referenced by configs.

    Equality is defined on the declared fields only so that runtime state kept
    in private attributes (counters, locks) does not affect document
    round-trips.
    """

    model_config = ConfigDict(extra="forbid")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BaseModel):
            return NotImplemented
        return type(self) is type(other) and self.model_dump() == other.model_dump()
