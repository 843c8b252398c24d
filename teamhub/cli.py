"""
Interactive console for managing organizations, teams and members.
"""
import argparse
import cmd
import logging
import os
import shlex
import sys

from dotenv import load_dotenv

from teamhub.config import ConfigError, HierarchyConfig
from teamhub.enums import Role
from teamhub.messaging import InMemoryMessageAdapter
from teamhub.models import ModelValidationError
from teamhub.store import HierarchyStore
from teamhub.validation import validate_member_form, validate_organization_form, validate_team_form

logger = logging.getLogger(__name__)


def plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


class FormCancelled(Exception):
    """Raised when input ends in the middle of a form; the form is discarded."""


class TeamhubShell(cmd.Cmd):
    """Console front end. Every change goes through the HierarchyStore."""

    intro = "Organization Manager. Type help or ? to list commands."
    prompt = "(teamhub) "

    def __init__(self, store: HierarchyStore, stdin=None, stdout=None):
        super().__init__(stdin=stdin, stdout=stdout)
        if stdin is not None:
            self.use_rawinput = False
        self.store = store
        # view state only, never part of the hierarchy
        self.expanded = set()

    def _print(self, text: str = ''):
        self.stdout.write(text + '\n')

    def _ask(self, label: str) -> str:
        self.stdout.write(f"{label}: ")
        self.stdout.flush()
        if self.use_rawinput:
            try:
                return input()
            except (EOFError, KeyboardInterrupt) as e:
                raise FormCancelled() from e
        line = self.stdin.readline()
        if not line:
            raise FormCancelled()
        return line.rstrip("\r\n")

    def _confirm(self, question: str) -> bool:
        return self._ask(f"{question} [y/N]").strip().lower() in ('y', 'yes')

    def _args(self, arg: str, count: int, usage: str):
        parts = shlex.split(arg)
        if len(parts) != count:
            self._print(f"Usage: {usage}")
            return None
        return parts

    def _show_errors(self, errors: dict):
        for name, message in errors.items():
            self._print(f"  {name}: {message}")

    def _flush_notifications(self):
        adapter = self.store.message_adapter
        if isinstance(adapter, InMemoryMessageAdapter):
            for message in adapter.consume_messages(self.store.queue_name):
                marker = '!' if message['variant'] == 'destructive' else '*'
                self._print(f"{marker} {message['title']}: {message['description']}")

    def _not_found(self):
        self._print("Nothing changed: that item no longer exists.")

    def _submit(self, change, *args):
        try:
            result = change(*args)
        except ModelValidationError as e:
            self._show_errors(e.errors)
            return
        if result is None:
            self._not_found()
        self._flush_notifications()

    def emptyline(self):
        pass

    def do_list(self, arg):
        """list: show the visible organizations with their team and member counts."""
        snapshot = self.store.snapshot
        if not snapshot.organizations:
            self._print("No organizations yet. Create your first one with org-create.")
            return
        selected = self.store.selected_organization()
        visible = self.store.visible_organizations()
        if snapshot.selected_org_id is None:
            self._print("All Organizations")
        else:
            self._print(f"Viewing: {selected.name if selected else snapshot.selected_org_id}")
        self._print(plural(len(visible), 'organization'))
        for org in visible:
            self._print(f"[{org.entity_id}] {org.name} - {org.description} "
                        f"({plural(org.team_count, 'team')}, {plural(org.member_count, 'member')})")
            if org.entity_id not in self.expanded:
                continue
            if not org.teams:
                self._print("    No teams yet.")
            for team in org.teams:
                self._print(f"    [{team.entity_id}] {team.name} - {team.description} "
                            f"({plural(team.member_count, 'member')})")
                for member in team.members:
                    admin = ' [Admin]' if member.is_admin else ''
                    self._print(f"        [{member.entity_id}] {member.name} <{member.email}> "
                                f"{member.role}{admin}")

    def do_expand(self, arg):
        """expand ORG_ID: show the teams and members of an organization in list."""
        args = self._args(arg, 1, "expand ORG_ID")
        if args:
            self.expanded.add(args[0])

    def do_collapse(self, arg):
        """collapse ORG_ID: hide the teams of an organization in list."""
        args = self._args(arg, 1, "collapse ORG_ID")
        if args:
            self.expanded.discard(args[0])

    def do_select(self, arg):
        """select ORG_ID|all: only list one organization, or all of them again."""
        args = self._args(arg, 1, "select ORG_ID|all")
        if not args:
            return
        org_id = None if args[0] == 'all' else args[0]
        if self.store.select_organization(org_id) is None:
            self._not_found()

    def do_org_create(self, arg):
        """org-create: create an organization."""
        name = self._ask("Organization name")
        description = self._ask("Description")
        errors = validate_organization_form(name, description)
        if errors:
            self._show_errors(errors)
            return
        self._submit(self.store.create_organization, name, description)

    def do_org_delete(self, arg):
        """org-delete ORG_ID: delete an organization with all its teams and members."""
        args = self._args(arg, 1, "org-delete ORG_ID")
        if not args:
            return
        org = self.store.get_organization(args[0])
        if org is None:
            self._not_found()
            return
        if not self._confirm(f'Are you sure you want to delete "{org.name}"? This action cannot be undone '
                             'and will remove all teams and users within this organization.'):
            return
        self.expanded.discard(org.entity_id)
        self._submit(self.store.delete_organization, org.entity_id)

    def do_team_create(self, arg):
        """team-create ORG_ID: add a team to an organization."""
        args = self._args(arg, 1, "team-create ORG_ID")
        if not args:
            return
        name = self._ask("Team name")
        description = self._ask("Description")
        errors = validate_team_form(name, description)
        if errors:
            self._show_errors(errors)
            return
        self._submit(self.store.create_team, args[0], name, description)

    def do_team_delete(self, arg):
        """team-delete ORG_ID TEAM_ID: delete a team with all its members."""
        args = self._args(arg, 2, "team-delete ORG_ID TEAM_ID")
        if not args:
            return
        team = self.store.get_team(*args)
        if team is None:
            self._not_found()
            return
        if not self._confirm(f'Are you sure you want to delete "{team.name}"? This action cannot be undone '
                             'and will remove all users from this team.'):
            return
        self._submit(self.store.delete_team, *args)

    def do_member_add(self, arg):
        """member-add ORG_ID TEAM_ID: add a member to a team."""
        args = self._args(arg, 2, "member-add ORG_ID TEAM_ID")
        if not args:
            return
        name = self._ask("Full name")
        email = self._ask("Email address")
        role = self._ask(f"Role ({', '.join(Role.values())})").strip()
        is_admin = self._confirm("Admin privileges?")
        errors = validate_member_form(name, email, role)
        if errors:
            self._show_errors(errors)
            return
        self._submit(self.store.add_member, args[0], args[1], name, email, role, is_admin)

    def do_member_delete(self, arg):
        """member-delete ORG_ID TEAM_ID MEMBER_ID: remove a member from a team."""
        args = self._args(arg, 3, "member-delete ORG_ID TEAM_ID MEMBER_ID")
        if not args:
            return
        member = self.store.get_member(*args)
        if member is None:
            self._not_found()
            return
        if not self._confirm(f'Are you sure you want to remove "{member.name}" from this team? '
                             'This action cannot be undone.'):
            return
        self._submit(self.store.delete_member, *args)

    def do_admin(self, arg):
        """admin ORG_ID TEAM_ID MEMBER_ID: grant or revoke admin status."""
        args = self._args(arg, 3, "admin ORG_ID TEAM_ID MEMBER_ID")
        if args:
            self._submit(self.store.toggle_member_admin, *args)

    def do_quit(self, arg):
        """quit: leave the console. Nothing is saved."""
        return True

    do_EOF = do_quit

    def onecmd(self, line):
        # cmd only dispatches identifier characters, so map org-create to do_org_create
        command, _, rest = line.strip().partition(' ')
        if command in ('help', '?'):
            rest = rest.replace('-', '_')
        try:
            return super().onecmd(f"{command.replace('-', '_')} {rest}".strip())
        except FormCancelled:
            self._print()
            self._print("Cancelled, nothing was changed.")
            return None


def create_parser():
    parser = argparse.ArgumentParser(
        description="Manage organizations, teams and members in memory."
    )
    parser.add_argument(
        '--env-files',
        type=str,
        nargs='+',
        help="Path to environment files.",
        default=[]
    )
    parser.add_argument(
        '--log-level',
        type=str,
        help="Overrides TEAMHUB_LOG_LEVEL.",
        default=None
    )
    return parser


def main(argv=None):
    parser = create_parser()
    args = parser.parse_args(argv)

    for env_file in args.env_files:
        if not (os.path.exists(env_file) and os.path.isfile(env_file)):
            parser.error(f"{env_file} file not found.")
        load_dotenv(env_file)
    if args.log_level:
        os.environ[HierarchyConfig.LOG_LEVEL] = args.log_level

    try:
        config = HierarchyConfig()
    except ConfigError as e:
        parser.error(str(e))
        return 2

    logging.basicConfig(level=config.log_level,
                        format='%(asctime)s %(levelname)s %(name)s: %(message)s')
    store = HierarchyStore.from_config(config)
    logger.info("Starting console with %s notifications on %s", config.message_adapter_type,
                config.notification_queue)
    TeamhubShell(store).cmdloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
