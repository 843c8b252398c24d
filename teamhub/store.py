"""
The hierarchy store: the single writer of the organization tree.
"""
import logging
from typing import Optional, Tuple, Union

from teamhub import ids, operations
from teamhub.enums import Role
from teamhub.messaging import MessageAdapter, InMemoryMessageAdapter, adapter_factory, notifications
from teamhub.models import Hierarchy, Member, Organization, Team
from teamhub.operations import EntityNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_QUEUE_NAME = 'teamhub-notifications'


class HierarchyStore:
    """
    Holds the current Hierarchy snapshot and applies every change to it.

    Each mutating method returns the new snapshot, or None when its target no
    longer exists (the snapshot is then left as it was and no notification is
    sent). Invalid input raises ModelValidationError before anything changes.
    Readers only ever receive immutable snapshots.
    """

    def __init__(
        self,
        message_adapter: MessageAdapter = None,
        queue_name: str = DEFAULT_QUEUE_NAME,
        state: Hierarchy = None
    ):
        self.message_adapter = message_adapter if message_adapter is not None else InMemoryMessageAdapter()
        self.queue_name = queue_name
        self._state = state if state is not None else Hierarchy()

    @classmethod
    def from_config(cls, config) -> "HierarchyStore":
        """Build a store wired to the id length and notification channel in `config`."""
        ids.configure(config.id_length)
        return cls(message_adapter=adapter_factory.get(config), queue_name=config.notification_queue)

    @property
    def snapshot(self) -> Hierarchy:
        return self._state

    def _send(self, message: dict):
        with self.message_adapter:
            self.message_adapter.send_message(self.queue_name, message)

    def _apply(self, operation, *args, notification=None) -> Optional[Hierarchy]:
        """Run a pure operation against the current snapshot and swap in its result."""
        try:
            state, entity = operation(self._state, *args)
        except EntityNotFoundError as e:
            logger.info("%s skipped: %s", operation.__name__, e)
            return None

        self._state = state
        logger.debug("%s applied to %s", operation.__name__, entity.entity_id)
        if notification is not None:
            try:
                self._send(notification(entity))
            except Exception:  # pylint: disable=W0718
                logger.exception("Notification for %s could not be sent", operation.__name__)
        return state

    def create_organization(self, name: str, description: str) -> Hierarchy:
        return self._apply(operations.create_organization, name, description,
                           notification=notifications.organization_created)

    def delete_organization(self, org_id: str) -> Optional[Hierarchy]:
        return self._apply(operations.delete_organization, org_id,
                           notification=notifications.organization_deleted)

    def create_team(self, org_id: str, name: str, description: str) -> Optional[Hierarchy]:
        return self._apply(operations.create_team, org_id, name, description,
                           notification=notifications.team_created)

    def delete_team(self, org_id: str, team_id: str) -> Optional[Hierarchy]:
        return self._apply(operations.delete_team, org_id, team_id,
                           notification=notifications.team_deleted)

    def add_member(self, org_id: str, team_id: str, name: str, email: str,
                   role: Union[Role, str], is_admin: bool = False) -> Optional[Hierarchy]:
        return self._apply(operations.add_member, org_id, team_id, name, email, role, is_admin,
                           notification=notifications.member_added)

    def delete_member(self, org_id: str, team_id: str, member_id: str) -> Optional[Hierarchy]:
        return self._apply(operations.delete_member, org_id, team_id, member_id,
                           notification=notifications.member_removed)

    def toggle_member_admin(self, org_id: str, team_id: str, member_id: str) -> Optional[Hierarchy]:
        return self._apply(operations.toggle_member_admin, org_id, team_id, member_id,
                           notification=notifications.member_admin_toggled)

    def select_organization(self, org_id: Optional[str]) -> Optional[Hierarchy]:
        try:
            self._state = operations.select_organization(self._state, org_id)
        except EntityNotFoundError as e:
            logger.info("select_organization skipped: %s", e)
            return None
        return self._state

    def visible_organizations(self) -> Tuple[Organization, ...]:
        return operations.visible_organizations(self._state)

    def selected_organization(self) -> Optional[Organization]:
        if self._state.selected_org_id is None:
            return None
        return self._state.find_organization(self._state.selected_org_id)

    def get_organization(self, org_id: str) -> Optional[Organization]:
        return self._state.find_organization(org_id)

    def get_team(self, org_id: str, team_id: str) -> Optional[Team]:
        org = self.get_organization(org_id)
        return org.find_team(team_id) if org else None

    def get_member(self, org_id: str, team_id: str, member_id: str) -> Optional[Member]:
        team = self.get_team(org_id, team_id)
        return team.find_member(member_id) if team else None
