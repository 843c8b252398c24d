"""
Pure operations over a Hierarchy snapshot.

Every operation takes the current snapshot plus its input and returns a new
snapshot; the input snapshot is never modified. Untouched organizations,
teams and members are shared between the old and the new snapshot.

An operation aimed at an id that is not present raises EntityNotFoundError,
and invalid input raises ModelValidationError. In both cases no new snapshot
exists, so there is no partially applied change.
"""
from dataclasses import replace
from typing import Optional, Tuple, Union

from teamhub.enums import Role
from teamhub.models import Hierarchy, Member, Organization, Team, TeamhubError


class EntityNotFoundError(TeamhubError):
    """Raised when an operation targets an organization, team or member that no longer exists."""

    def __init__(self, kind: str, entity_id: Optional[str]):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} '{entity_id}' not found")


def _clean(value):
    return value.strip() if isinstance(value, str) else value


def _without(items: tuple, entity_id: str) -> tuple:
    return tuple(item for item in items if item.entity_id != entity_id)


def _replacing(items: tuple, updated) -> tuple:
    return tuple(updated if item.entity_id == updated.entity_id else item for item in items)


def get_organization(state: Hierarchy, org_id: str) -> Organization:
    org = state.find_organization(org_id)
    if org is None:
        raise EntityNotFoundError('Organization', org_id)
    return org


def get_team(state: Hierarchy, org_id: str, team_id: str) -> Tuple[Organization, Team]:
    org = get_organization(state, org_id)
    team = org.find_team(team_id)
    if team is None:
        raise EntityNotFoundError('Team', team_id)
    return org, team


def get_member(state: Hierarchy, org_id: str, team_id: str, member_id: str) -> Tuple[Organization, Team, Member]:
    org, team = get_team(state, org_id, team_id)
    member = team.find_member(member_id)
    if member is None:
        raise EntityNotFoundError('Member', member_id)
    return org, team, member


def _with_team(state: Hierarchy, org: Organization, team: Team) -> Hierarchy:
    org = replace(org, teams=_replacing(org.teams, team))
    return replace(state, organizations=_replacing(state.organizations, org))


def create_organization(state: Hierarchy, name: str, description: str) -> Tuple[Hierarchy, Organization]:
    org = Organization(name=_clean(name), description=_clean(description))
    org.validate()
    return replace(state, organizations=state.organizations + (org,)), org


def delete_organization(state: Hierarchy, org_id: str) -> Tuple[Hierarchy, Organization]:
    org = get_organization(state, org_id)
    selected = None if state.selected_org_id == org_id else state.selected_org_id
    return replace(state, organizations=_without(state.organizations, org_id), selected_org_id=selected), org


def create_team(state: Hierarchy, org_id: str, name: str, description: str) -> Tuple[Hierarchy, Team]:
    org = get_organization(state, org_id)
    team = Team(name=_clean(name), description=_clean(description))
    team.validate()
    org = replace(org, teams=org.teams + (team,))
    return replace(state, organizations=_replacing(state.organizations, org)), team


def delete_team(state: Hierarchy, org_id: str, team_id: str) -> Tuple[Hierarchy, Team]:
    org, team = get_team(state, org_id, team_id)
    org = replace(org, teams=_without(org.teams, team_id))
    return replace(state, organizations=_replacing(state.organizations, org)), team


def add_member(state: Hierarchy, org_id: str, team_id: str, name: str, email: str,
               role: Union[Role, str], is_admin: bool = False) -> Tuple[Hierarchy, Member]:
    org, team = get_team(state, org_id, team_id)
    member = Member(name=_clean(name), email=_clean(email), role=role, is_admin=bool(is_admin))
    member.validate()
    team = replace(team, members=team.members + (member,))
    return _with_team(state, org, team), member


def delete_member(state: Hierarchy, org_id: str, team_id: str, member_id: str) -> Tuple[Hierarchy, Member]:
    org, team, member = get_member(state, org_id, team_id, member_id)
    team = replace(team, members=_without(team.members, member_id))
    return _with_team(state, org, team), member


def toggle_member_admin(state: Hierarchy, org_id: str, team_id: str, member_id: str) -> Tuple[Hierarchy, Member]:
    org, team, member = get_member(state, org_id, team_id, member_id)
    member = replace(member, is_admin=not member.is_admin)
    team = replace(team, members=_replacing(team.members, member))
    return _with_team(state, org, team), member


def select_organization(state: Hierarchy, org_id: Optional[str]) -> Hierarchy:
    """Set the active filter. Selecting an id that is not present is a not-found, not a stale selection."""
    if org_id is not None:
        get_organization(state, org_id)
    return replace(state, selected_org_id=org_id)


def visible_organizations(state: Hierarchy) -> Tuple[Organization, ...]:
    """
    Project the organizations that the current filter shows.

    No selection shows everything. A selection that matches nothing yields an
    empty tuple rather than falling back to everything.
    """
    if state.selected_org_id is None:
        return state.organizations
    return tuple(org for org in state.organizations if org.entity_id == state.selected_org_id)
