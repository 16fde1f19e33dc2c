"""
Python Bugzilla REST/JSONRPC Interface

Simple command-line interface to bugzilla to allow:
 - getting bug info
 - changing the status of a bug
 - listing and adding external bugs (GitHub pull requests)

"""

import datetime
import sys

from bugzlink.cli_argparser import make_arg_parser
from bugzlink.configfile import load_config
from bugzlink.exceptions import BugzError
from bugzlink.identifiers import pull_from_identifier
from bugzlink.log import log_error, log_info, log_setup
from bugzlink.settings import Settings
from bugzlink.types import BugUpdate

TIME_FORMAT = '%Y-%m-%d %H:%M'


def printtime(when):
    try:
        dt = datetime.datetime.strptime(when, '%Y-%m-%dT%H:%M:%SZ')
    except ValueError:
        return when
    return dt.strftime(TIME_FORMAT)


def show_bug_info(bug):
    FieldMap = {
        'alias': 'Alias',
        'summary': 'Title',
        'status': 'Status',
        'resolution': 'Resolution',
        'product': 'Product',
        'component': 'Component',
        'version': 'Version',
        'target_release': 'TargetRelease',
        'platform': 'Hardware',
        'op_sys': 'OpSystem',
        'priority': 'Priority',
        'severity': 'Severity',
        'target_milestone': 'TargetMilestone',
        'assigned_to_detail': 'AssignedTo',
        'qa_contact_detail': 'QAContact',
        'url': 'URL',
        'whiteboard': 'Whiteboard',
        'keywords': 'Keywords',
        'depends_on': 'dependsOn',
        'blocks': 'Blocks',
        'dupe_of': 'DuplicateOf',
        'creation_time': 'Reported',
        'creator_detail': 'Reporter',
        'last_change_time': 'Updated',
        'cc_detail': 'CC',
        'see_also': 'See Also',
    }
    TimeFields = ['last_change_time', 'creation_time']

    print('%-12s: %s' % ('Bug', bug.id))
    for field, desc in FieldMap.items():
        value = getattr(bug, field)
        if field in TimeFields:
            value = printtime(value)
        if field in ['assigned_to_detail', 'creator_detail',
                     'qa_contact_detail']:
            if value is not None:
                print('%-12s: %s <%s>' % (desc, value.real_name, value.email))
        elif field == 'cc_detail':
            for cc in value:
                print('%-12s: %s <%s>' % (desc, cc.real_name, cc.email))
        elif field == 'see_also':
            for x in value:
                print('%-12s: %s' % (desc, x))
        elif isinstance(value, tuple):
            s = ', '.join(['%s' % x for x in value])
            if s:
                print('%-12s: %s' % (desc, s))
        elif value is not None and value != '':
            print('%-12s: %s' % (desc, value))

    for external in bug.external_bugs:
        print('%-12s: %s%s' % ('External', external.type.url,
                               external.ext_bz_bug_id))


def get(settings):
    """ Fetch bug details given the bug id """
    log_info('Getting bug %s ..' % settings.bugid)
    bug = settings.client.get_bug(settings.bugid)
    if getattr(settings, 'json', False):
        print(bug.model_dump_json(indent=2))
    else:
        show_bug_info(bug)


def modify(settings):
    """Modify an existing bug (eg. changing status or resolution.)"""
    params = {}
    for field in ('status', 'resolution', 'target_release', 'assigned_to',
                  'dupe_of'):
        if hasattr(settings, field):
            params[field] = getattr(settings, field)

    if 'dupe_of' in params:
        params.setdefault('status', 'RESOLVED')
        params.setdefault('resolution', 'DUPLICATE')

    update = BugUpdate(**params)
    if update.is_empty():
        raise BugzError('No changes were specified')

    settings.client.update_bug(settings.bugid, update)
    log_info('Modified bug %s with the following fields:' % settings.bugid)
    for key, value in update.to_json().items():
        log_info('  %-12s: %s' % (key, value))


def external(settings):
    """ List the external bugs attached to a bug """
    if getattr(settings, 'prs', False):
        external_bugs = settings.client.get_external_bug_prs_on_bug(
            settings.bugid)
    else:
        external_bugs = settings.client.get_external_bugs(settings.bugid)

    for ext in external_bugs:
        if ext.num is not None:
            print('%s %s/%s#%d' % (ext.type.url, ext.org, ext.repo, ext.num))
        else:
            print('%s %s' % (ext.type.url, ext.ext_bz_bug_id))

    log_info('%i external bug(s) found.' % len(external_bugs))


def link(settings):
    """ Attach a GitHub pull request to a bug """
    org, repo, num = pull_from_identifier(settings.pull)
    changed = settings.client.add_pull_request_as_external_bug(
        settings.bugid, org, repo, num)
    if changed:
        log_info('Linked %s to bug %s' % (settings.pull, settings.bugid))
    else:
        log_info('%s was already linked to bug %s' % (settings.pull,
                                                      settings.bugid))


def connections(settings):
    print('Known bug trackers:')
    print()
    for tracker in settings.connections:
        print(tracker)


def main(argv=None):
    log_setup()
    ArgParser = make_arg_parser()
    args = ArgParser.parse_args(argv)

    if not hasattr(args, 'func'):
        ArgParser.print_usage()
        return 1

    ConfigParser = load_config(getattr(args, 'config_file', None))

    try:
        settings = Settings(args, ConfigParser)
        args.func(settings)
    except BugzError as error:
        log_error(error)
        return 1
    except KeyboardInterrupt:
        log_info('Stopped due to keyboard interrupt')
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
