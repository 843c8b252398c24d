"""
Organization model
"""

from dataclasses import dataclass, field
from typing import Tuple

from teamhub.validation import DESCRIPTION_REQUIRED, ORGANIZATION_NAME_REQUIRED, check_required
from .base_model import BaseModel
from .team import Team


@dataclass(frozen=True, kw_only=True)
class Organization(BaseModel):
    """An organization model."""

    name: str = ''
    description: str = ''
    # teams own their members; nothing references across organizations
    teams: Tuple[Team, ...] = field(default=(), metadata={'model': Team})

    @property
    def team_count(self) -> int:
        return len(self.teams)

    @property
    def member_count(self) -> int:
        return sum(team.member_count for team in self.teams)

    def find_team(self, team_id: str):
        return next((t for t in self.teams if t.entity_id == team_id), None)

    def validate_name(self):
        return check_required(self.name, ORGANIZATION_NAME_REQUIRED)

    def validate_description(self):
        return check_required(self.description, DESCRIPTION_REQUIRED)
