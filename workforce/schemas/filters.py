"""Optional filter criteria accepted by catalog operations."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class PaymentFilter(BaseModel):
    """Narrows payment aggregates to users matching the given names.

    Any field left as ``None`` places no constraint on the result.
    """

    model_config = ConfigDict(frozen=True)

    first_name: str | None = None
    last_name: str | None = None


class UserFilter(BaseModel):
    """Optional user-name criteria for membership lookups."""

    model_config = ConfigDict(frozen=True)

    first_name: str | None = None
    last_name: str | None = None
