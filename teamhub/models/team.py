"""
Team model
"""

from dataclasses import dataclass, field
from typing import Tuple

from teamhub.validation import DESCRIPTION_REQUIRED, TEAM_NAME_REQUIRED, check_required
from .base_model import BaseModel
from .member import Member


@dataclass(frozen=True, kw_only=True)
class Team(BaseModel):
    """A team model. Members are kept in insertion order."""

    name: str = ''
    description: str = ''
    members: Tuple[Member, ...] = field(default=(), metadata={'model': Member})

    @property
    def member_count(self) -> int:
        return len(self.members)

    def find_member(self, member_id: str):
        return next((m for m in self.members if m.entity_id == member_id), None)

    def validate_name(self):
        return check_required(self.name, TEAM_NAME_REQUIRED)

    def validate_description(self):
        return check_required(self.description, DESCRIPTION_REQUIRED)
