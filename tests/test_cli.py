"""
Test cases for the console front end.
"""
import io
from unittest.mock import MagicMock, patch
import pytest

from teamhub.cli import TeamhubShell, create_parser, main, plural
from teamhub.messaging import InMemoryMessageAdapter, MessageAdapter
from teamhub.store import HierarchyStore


def make_shell(answers=''):
    store = HierarchyStore(message_adapter=InMemoryMessageAdapter())
    stdout = io.StringIO()
    shell = TeamhubShell(store, stdin=io.StringIO(answers), stdout=stdout)
    return shell, store, stdout


def seed(store):
    store.create_organization('Acme', 'Rockets')
    org = store.snapshot.organizations[0]
    store.create_team(org.entity_id, 'Core', 'Core team')
    team = store.get_organization(org.entity_id).teams[0]
    store.add_member(org.entity_id, team.entity_id, 'Ada', 'ada@acme.io', 'Developer')
    store.message_adapter.consume_messages(store.queue_name)
    return org, team, store.get_team(org.entity_id, team.entity_id).members[0]


def test_plural():
    assert plural(1, 'team') == '1 team'
    assert plural(0, 'team') == '0 teams'


def test_org_create_prints_notification():
    shell, store, stdout = make_shell("Acme\nRockets\n")
    shell.onecmd('org-create')
    assert store.snapshot.organizations[0].name == 'Acme'
    assert '* Organization Created: Acme has been successfully created.' in stdout.getvalue()


def test_org_create_shows_every_field_error():
    shell, store, stdout = make_shell(" \n \n")
    shell.onecmd('org-create')
    output = stdout.getvalue()
    assert 'name: Organization name is required' in output
    assert 'description: Description is required' in output
    assert store.snapshot.organizations == ()


def test_delete_requires_confirmation():
    shell, store, stdout = make_shell("n\n")
    org, _, _ = seed(store)
    shell.onecmd(f'org-delete {org.entity_id}')
    assert store.get_organization(org.entity_id) is not None
    assert 'Are you sure you want to delete "Acme"?' in stdout.getvalue()
    assert 'Organization Deleted' not in stdout.getvalue()


def test_delete_after_confirmation():
    shell, store, stdout = make_shell("y\n")
    org, _, _ = seed(store)
    shell.onecmd(f'org-delete {org.entity_id}')
    assert store.snapshot.organizations == ()
    assert '! Organization Deleted: Acme has been successfully deleted.' in stdout.getvalue()


def test_team_and_member_deletion_confirmed():
    shell, store, _ = make_shell("yes\ny\n")
    org, team, member = seed(store)
    shell.onecmd(f'member-delete {org.entity_id} {team.entity_id} {member.entity_id}')
    assert store.get_team(org.entity_id, team.entity_id).members == ()
    shell.onecmd(f'team-delete {org.entity_id} {team.entity_id}')
    assert store.get_organization(org.entity_id).teams == ()


def test_delete_of_missing_item_reports_not_found():
    shell, _, stdout = make_shell()
    shell.onecmd('org-delete nope')
    assert 'no longer exists' in stdout.getvalue()


def test_member_add_validates_before_store():
    shell, store, stdout = make_shell("Bob\nnot-an-email\nCEO\nn\n")
    org, team, _ = seed(store)
    shell.onecmd(f'member-add {org.entity_id} {team.entity_id}')
    output = stdout.getvalue()
    assert 'email: Please enter a valid email address' in output
    assert 'role: Role must be one of' in output
    assert store.get_team(org.entity_id, team.entity_id).member_count == 1


def test_member_add_and_admin_toggle():
    shell, store, stdout = make_shell("Bob\nbob@acme.io\nProduct Owner\ny\n")
    org, team, _ = seed(store)
    shell.onecmd(f'member-add {org.entity_id} {team.entity_id}')
    bob = store.get_team(org.entity_id, team.entity_id).members[-1]
    assert bob.is_admin is True
    assert str(bob.role) == 'Product Owner'
    shell.onecmd(f'admin {org.entity_id} {team.entity_id} {bob.entity_id}')
    assert store.get_member(org.entity_id, team.entity_id, bob.entity_id).is_admin is False
    assert 'Admin Status Updated' in stdout.getvalue()


def test_team_create_for_missing_org():
    shell, store, stdout = make_shell("Core\nCore team\n")
    shell.onecmd('team-create nope')
    assert 'no longer exists' in stdout.getvalue()


def test_list_shows_counts_and_expanded_tree():
    shell, store, stdout = make_shell()
    org, team, member = seed(store)
    shell.onecmd('list')
    assert 'All Organizations' in stdout.getvalue()
    assert '1 organization\n' in stdout.getvalue()
    assert 'Acme - Rockets (1 team, 1 member)' in stdout.getvalue()
    assert 'ada@acme.io' not in stdout.getvalue()

    shell.onecmd(f'expand {org.entity_id}')
    shell.onecmd('list')
    assert 'Core - Core team (1 member)' in stdout.getvalue()
    assert 'Ada <ada@acme.io> Developer' in stdout.getvalue()


def test_list_when_empty():
    shell, _, stdout = make_shell()
    shell.onecmd('list')
    assert 'No organizations yet' in stdout.getvalue()


def test_select_filters_list():
    shell, store, stdout = make_shell()
    org, _, _ = seed(store)
    store.create_organization('Globex', 'Other')
    shell.onecmd(f'select {org.entity_id}')
    shell.onecmd('list')
    assert 'Viewing: Acme' in stdout.getvalue()
    assert 'Globex' not in stdout.getvalue()
    shell.onecmd('select all')
    assert store.snapshot.selected_org_id is None


def test_wrong_arguments_print_usage():
    shell, _, stdout = make_shell()
    shell.onecmd('team-delete only-one')
    assert 'Usage: team-delete ORG_ID TEAM_ID' in stdout.getvalue()


def test_quit_stops_loop():
    shell, _, _ = make_shell()
    assert shell.onecmd('quit') is True
    assert shell.onecmd('EOF') is True


def test_parser_env_files():
    args = create_parser().parse_args(['--env-files', 'a.env', 'b.env', '--log-level', 'DEBUG'])
    assert args.env_files == ['a.env', 'b.env']
    assert args.log_level == 'DEBUG'


def test_main_rejects_missing_env_file(tmp_path):
    with pytest.raises(SystemExit):
        main(['--env-files', str(tmp_path / 'missing.env')])


@patch('teamhub.cli.TeamhubShell.cmdloop')
@patch('teamhub.cli.logging.basicConfig')
def test_main_starts_shell(mock_basic_config, mock_cmdloop, monkeypatch):
    # main writes the override into os.environ; setenv makes monkeypatch restore it
    monkeypatch.setenv('TEAMHUB_LOG_LEVEL', 'INFO')
    monkeypatch.delenv('TEAMHUB_MESSAGE_ADAPTER', raising=False)
    assert main(['--log-level', 'warning']) == 0
    mock_cmdloop.assert_called_once()
    assert mock_basic_config.call_args.kwargs['level'] == 'WARNING'


def test_failing_notification_channel_does_not_end_the_shell():
    adapter = MagicMock(spec=MessageAdapter)
    adapter.send_message.side_effect = RuntimeError("sqs down")
    store = HierarchyStore(message_adapter=adapter)
    shell = TeamhubShell(store, stdin=io.StringIO("Acme\nRockets\n"), stdout=io.StringIO())

    assert shell.onecmd('org-create') is None
    assert store.snapshot.organizations[0].name == 'Acme'


def test_end_of_input_at_a_prompt_cancels_the_form():
    shell, store, stdout = make_shell()
    shell.use_rawinput = True
    with patch('builtins.input', side_effect=EOFError):
        assert shell.onecmd('org-create') is None
    assert store.snapshot.organizations == ()
    assert 'Cancelled, nothing was changed.' in stdout.getvalue()


def test_interrupt_during_confirmation_cancels_the_delete():
    shell, store, stdout = make_shell()
    org, _, _ = seed(store)
    shell.use_rawinput = True
    with patch('builtins.input', side_effect=KeyboardInterrupt):
        shell.onecmd(f'org-delete {org.entity_id}')
    assert store.get_organization(org.entity_id) is not None
    assert 'Cancelled' in stdout.getvalue()


def test_closed_stdin_mid_form_cancels():
    shell, store, stdout = make_shell("Acme\n")
    shell.onecmd('org-create')
    assert store.snapshot.organizations == ()
    assert 'Cancelled' in stdout.getvalue()
