"""
Notification messages published after a successful hierarchy change.

Each message is a plain dict so any MessageAdapter can carry it:
``{"event", "title", "description", "variant", "entity_id"}``.
"""
from .enums import Event, Variant


def build_notification(event: Event, title: str, description: str, entity_id: str = None,
                       variant: Variant = Variant.default) -> dict:
    return {
        'event': str(event),
        'title': title,
        'description': description,
        'variant': str(variant),
        'entity_id': entity_id,
    }


def organization_created(org) -> dict:
    return build_notification(Event.organization_created, "Organization Created",
                              f"{org.name} has been successfully created.", org.entity_id)


def organization_deleted(org) -> dict:
    return build_notification(Event.organization_deleted, "Organization Deleted",
                              f"{org.name} has been successfully deleted.", org.entity_id,
                              Variant.destructive)


def team_created(team) -> dict:
    return build_notification(Event.team_created, "Team Created",
                              f"{team.name} has been added to the organization.", team.entity_id)


def team_deleted(team) -> dict:
    return build_notification(Event.team_deleted, "Team Deleted",
                              "Team has been successfully deleted.", team.entity_id,
                              Variant.destructive)


def member_added(member) -> dict:
    return build_notification(Event.member_added, "User Added",
                              f"{member.name} has been added to the team.", member.entity_id)


def member_removed(member) -> dict:
    return build_notification(Event.member_removed, "User Removed",
                              "User has been successfully removed from the team.", member.entity_id,
                              Variant.destructive)


def member_admin_toggled(member) -> dict:
    return build_notification(Event.member_admin_toggled, "Admin Status Updated",
                              "User admin status has been successfully updated.", member.entity_id)
