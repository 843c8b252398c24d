"""
Member model
"""

from dataclasses import dataclass
from typing import Union

from teamhub.enums import Role
from teamhub.validation import NAME_REQUIRED, check_email, check_required, check_role, is_valid_role
from .base_model import BaseModel


@dataclass(frozen=True, kw_only=True)
class Member(BaseModel):
    """A team member (user) model."""

    name: str = ''
    email: str = ''
    role: Union[Role, str, None] = None
    is_admin: bool = False

    def __post_init__(self):
        if isinstance(self.role, str) and not isinstance(self.role, Role) and is_valid_role(self.role):
            object.__setattr__(self, 'role', Role(self.role))

    def validate_name(self):
        return check_required(self.name, NAME_REQUIRED)

    def validate_email(self):
        return check_email(self.email)

    def validate_role(self):
        return check_role(self.role)
