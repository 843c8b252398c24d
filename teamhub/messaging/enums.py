"""Messaging enums"""
from enum import Enum


class MessageAdapterType(str, Enum):
    """Available notification channels"""
    memory = 'memory'
    logging = 'logging'
    sqs = 'sqs'

    def __str__(self):
        return str(self.value)


class Variant(str, Enum):
    """Notification styles"""
    default = 'default'
    destructive = 'destructive'

    def __str__(self):
        return str(self.value)


class Event(str, Enum):
    """Hierarchy change events"""
    organization_created = 'organization_created'
    organization_deleted = 'organization_deleted'
    team_created = 'team_created'
    team_deleted = 'team_deleted'
    member_added = 'member_added'
    member_removed = 'member_removed'
    member_admin_toggled = 'member_admin_toggled'

    def __str__(self):
        return str(self.value)
