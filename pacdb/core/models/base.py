"""
Pydantic bases shared by pacdb models.

Package records parsed from the local database derive from ImmutableModel;
configuration sections derive from PacdbBaseModel through ConfigBaseModel.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class PacdbBaseModel(BaseModel):
    """Strict model: no type coercion, no unknown fields.

    Assignments are validated too. Model instances passed as field values
    are taken as they are, without a second validation.
    """

    model_config = ConfigDict(
        strict=True,
        validate_assignment=True,
        extra="forbid",
        populate_by_name=True,
        revalidate_instances="never",
    )


class ImmutableModel(PacdbBaseModel):
    """PacdbBaseModel that is frozen once built.

    A LocalPackage is shared by every lookup that hits its cache slot, so
    no caller may change it.
    """

    # Merged with the parent config by pydantic.
    model_config = ConfigDict(frozen=True)
