# SPDX-License-Identifier: Apache-2.0
"""Work history records consumed by the Gantt layout."""

from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

IntervalKind = Literal["work", "volunteer"]


class WorkInterval(BaseModel):
    """A position held at an organization between two dates.

    Dates use ``MM/YYYY`` or ``YYYY``; ``end_date`` may also be ``current``.
    CV exports name the organization ``company`` for work entries, which is
    accepted as an alias.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    position: str
    organization: str = Field(
        validation_alias=AliasChoices("organization", "company")
    )
    start_date: str = Field(validation_alias=AliasChoices("start_date", "startDate"))
    end_date: str = Field(
        default="current", validation_alias=AliasChoices("end_date", "endDate")
    )
    kind: IntervalKind = "work"

    @property
    def is_current(self) -> bool:
        return self.end_date.strip().lower() == "current"
