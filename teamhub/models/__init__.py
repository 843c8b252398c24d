"""
Models for teamhub
"""

from .base_model import BaseModel, ModelValidationError, TeamhubError
from .member import Member
from .team import Team
from .organization import Organization
from .hierarchy import Hierarchy
