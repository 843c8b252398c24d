"""
teamhub: an in-memory manager for organizations, their teams and team members.
"""
from .enums import Role
from .models import Hierarchy, Member, ModelValidationError, Organization, Team, TeamhubError
from .operations import EntityNotFoundError
from .store import HierarchyStore
