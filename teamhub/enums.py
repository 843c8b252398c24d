"""Member role enum"""
from enum import Enum


class Role(str, Enum):
    """Roles a team member can hold"""
    developer = 'Developer'
    designer = 'Designer'
    manager = 'Manager'
    analyst = 'Analyst'
    tester = 'Tester'
    product_owner = 'Product Owner'

    def __str__(self):
        return str(self.value)

    @classmethod
    def values(cls):
        return [role.value for role in cls]
