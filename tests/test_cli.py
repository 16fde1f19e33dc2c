import json
from types import SimpleNamespace
from unittest import mock

import pytest

import bugzlink.cli
from bugzlink import log
from bugzlink.exceptions import BugzError, IdentifierError, NotFoundError
from bugzlink.types import Bug, BugUpdate, ExternalBug, ExternalBugType, User


@pytest.fixture(autouse=True)
def no_console_logging(monkeypatch):
    monkeypatch.setattr(bugzlink.cli, 'log_setup', lambda: None)
    monkeypatch.setattr(log, 'debugLevel', 0)
    monkeypatch.setattr(log, 'quiet', False)


def make_settings(**kwargs):
    return SimpleNamespace(client=mock.MagicMock(), **kwargs)


def test_get_shows_bug(capsys):
    settings = make_settings(bugid=5)
    settings.client.get_bug.return_value = Bug(
        id=5, summary='it broke', status='NEW',
        assigned_to_detail=User(real_name='Jane Doe', email='jane@x.org'),
        keywords=['Regression', 'Triaged'],
        creation_time='2019-05-01T19:33:36Z')
    bugzlink.cli.get(settings)
    out = capsys.readouterr().out
    settings.client.get_bug.assert_called_once_with(5)
    assert 'Title       : it broke' in out
    assert 'AssignedTo  : Jane Doe <jane@x.org>' in out
    assert 'Keywords    : Regression, Triaged' in out
    assert 'Reported    : 2019-05-01 19:33' in out


def test_get_json(capsys):
    settings = make_settings(bugid=5, json=True)
    settings.client.get_bug.return_value = Bug(id=5, summary='it broke')
    bugzlink.cli.get(settings)
    data = json.loads(capsys.readouterr().out)
    assert data['id'] == 5
    assert data['summary'] == 'it broke'


def test_modify_sends_given_fields():
    settings = make_settings(bugid=5, status='RESOLVED', resolution='FIXED')
    bugzlink.cli.modify(settings)
    settings.client.update_bug.assert_called_once_with(
        5, BugUpdate(status='RESOLVED', resolution='FIXED'))


def test_modify_duplicate_resolves_the_bug():
    settings = make_settings(bugid=5, dupe_of=4)
    bugzlink.cli.modify(settings)
    update = settings.client.update_bug.call_args[0][1]
    assert update.to_json() == {'status': 'RESOLVED',
                                'resolution': 'DUPLICATE', 'dupe_of': 4}


def test_modify_without_changes_fails():
    settings = make_settings(bugid=5)
    with pytest.raises(BugzError):
        bugzlink.cli.modify(settings)
    settings.client.update_bug.assert_not_called()


def test_external_lists_links(capsys):
    github = ExternalBugType(url='https://github.com/')
    settings = make_settings(bugid=5)
    settings.client.get_external_bugs.return_value = [
        ExternalBug(type=github, bug_id=5, ext_bz_bug_id='org/repo/pull/1')
        .with_pull('org', 'repo', 1),
        ExternalBug(type=github, bug_id=5, ext_bz_bug_id='org/repo/issues/2'),
    ]
    bugzlink.cli.external(settings)
    assert capsys.readouterr().out.splitlines() == [
        'https://github.com/ org/repo#1',
        'https://github.com/ org/repo/issues/2',
    ]
    settings.client.get_external_bug_prs_on_bug.assert_not_called()


def test_external_prs_only():
    settings = make_settings(bugid=5, prs=True)
    settings.client.get_external_bug_prs_on_bug.return_value = []
    bugzlink.cli.external(settings)
    settings.client.get_external_bug_prs_on_bug.assert_called_once_with(5)
    settings.client.get_external_bugs.assert_not_called()


def test_link():
    settings = make_settings(bugid=5, pull='org/repo/pull/12')
    settings.client.add_pull_request_as_external_bug.return_value = True
    bugzlink.cli.link(settings)
    settings.client.add_pull_request_as_external_bug.assert_called_once_with(
        5, 'org', 'repo', 12)


def test_link_rejects_bad_identifier():
    settings = make_settings(bugid=5, pull='org/repo/issues/12')
    with pytest.raises(IdentifierError):
        bugzlink.cli.link(settings)
    settings.client.add_pull_request_as_external_bug.assert_not_called()


@pytest.fixture
def config_file(tmp_path):
    user_config = tmp_path / 'bugzlinkrc'
    user_config.write_text('[default]\nconnection = example\n\n'
                           '[example]\nbase = https://bugzilla.example.com\n'
                           'key = api-key\n')
    return str(user_config)


def test_main_runs_command(config_file, capsys):
    with mock.patch('bugzlink.settings.Client') as Client:
        Client.return_value.get_bug.return_value = Bug(id=7, summary='x')
        status = bugzlink.cli.main(['--config-file', config_file,
                                    '--auth-method', 'bearer', 'get', '7'])
    assert status == 0
    Client.assert_called_once_with('https://bugzilla.example.com', 'api-key',
                                   auth_method='bearer', timeout=None,
                                   verify=True)
    assert 'Bug         : 7' in capsys.readouterr().out


def test_main_reports_errors(config_file):
    with mock.patch('bugzlink.settings.Client') as Client:
        Client.return_value.get_bug.side_effect = NotFoundError('gone')
        status = bugzlink.cli.main(['--config-file', config_file, 'get', '7'])
    assert status == 1


def test_main_without_command(config_file):
    assert bugzlink.cli.main(['--config-file', config_file]) == 1


def test_connections(config_file, capsys):
    assert bugzlink.cli.main(['--config-file', config_file,
                              'connections']) == 0
    assert 'example' in capsys.readouterr().out.splitlines()
