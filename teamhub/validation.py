"""
Field validation shared by every creation form.

All validators are pure. The form validators return a mapping of field name
to error message; an empty mapping means the input is valid. Every failing
field is reported, nothing short-circuits.

The email check is intentionally permissive, not RFC 5322: exactly one ``@``
with at least one non-whitespace character before it, and a domain of
non-whitespace segments containing at least one ``.``::

    ^[^\\s@]+@[^\\s@]+\\.[^\\s@]+$
"""
import re
from typing import Dict, Optional, Union

from teamhub.enums import Role

EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')

NAME_REQUIRED = 'Name is required'
DESCRIPTION_REQUIRED = 'Description is required'
ORGANIZATION_NAME_REQUIRED = 'Organization name is required'
TEAM_NAME_REQUIRED = 'Team name is required'
EMAIL_REQUIRED = 'Email is required'
EMAIL_INVALID = 'Please enter a valid email address'
ROLE_REQUIRED = 'Role is required'
ROLE_INVALID = 'Role must be one of: ' + ', '.join(Role.values())


def is_blank(value: Optional[str]) -> bool:
    return not isinstance(value, str) or not value.strip()


def is_valid_email(value: Optional[str]) -> bool:
    if not isinstance(value, str):
        return False
    return EMAIL_PATTERN.fullmatch(value.strip()) is not None


def is_valid_role(value: Union[Role, str, None]) -> bool:
    if isinstance(value, Role):
        return True
    return value in Role.values()


def check_required(value: Optional[str], message: str) -> Optional[str]:
    """Return `message` when `value` is blank, else None."""
    return message if is_blank(value) else None


def check_email(value: Optional[str]) -> Optional[str]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return EMAIL_REQUIRED
    if not is_valid_email(value):
        return EMAIL_INVALID
    return None


def check_role(value: Union[Role, str, None]) -> Optional[str]:
    if value is None or value == '':
        return ROLE_REQUIRED
    if not is_valid_role(value):
        return ROLE_INVALID
    return None


def _collect(**checks: Optional[str]) -> Dict[str, str]:
    return {name: message for name, message in checks.items() if message}


def validate_organization_form(name: Optional[str], description: Optional[str]) -> Dict[str, str]:
    return _collect(
        name=check_required(name, ORGANIZATION_NAME_REQUIRED),
        description=check_required(description, DESCRIPTION_REQUIRED),
    )


def validate_team_form(name: Optional[str], description: Optional[str]) -> Dict[str, str]:
    return _collect(
        name=check_required(name, TEAM_NAME_REQUIRED),
        description=check_required(description, DESCRIPTION_REQUIRED),
    )


def validate_member_form(name: Optional[str], email: Optional[str],
                         role: Union[Role, str, None]) -> Dict[str, str]:
    return _collect(
        name=check_required(name, NAME_REQUIRED),
        email=check_email(email),
        role=check_role(role),
    )
