"""
Hierarchy snapshot model
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from .base_model import BaseModel
from .organization import Organization

SNAPSHOT_ID = 'hierarchy'


@dataclass(frozen=True, kw_only=True)
class Hierarchy(BaseModel):
    """
    An immutable snapshot of every organization plus the active filter.

    Snapshots share the fixed id `SNAPSHOT_ID` and never draw from the id
    generator; `created_on` is when the tree was started and carries over to
    every later snapshot. `selected_org_id` is None when all organizations
    are shown.
    """

    entity_id: str = field(default=SNAPSHOT_ID, metadata={'field_type': 'entity_id'})
    organizations: Tuple[Organization, ...] = field(default=(), metadata={'model': Organization})
    selected_org_id: Optional[str] = None

    @property
    def organization_count(self) -> int:
        return len(self.organizations)

    def find_organization(self, org_id: str):
        return next((o for o in self.organizations if o.entity_id == org_id), None)
