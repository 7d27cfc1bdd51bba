#!/usr/bin/env python
# PYTHON_ARGCOMPLETE_OK
import argparse
import logging
import os
import sys

from . import __version__, config, session, ui, util
from .assuan import escape
from .assuan.errors import ParseError

try:
    import argcomplete
except ImportError:
    argcomplete = None

log = logging.getLogger(__name__)


def create_parser(environ=None):
    defaults = config.defaults(environ)
    p = argparse.ArgumentParser(
        description='Pinentry program, reading Assuan requests from stdin.')
    p.add_argument('--version', action='version', version=__version__)
    p.add_argument('-v', '--verbose', default=0, action='count')
    p.add_argument('--log-file', default=defaults['log_file'],
                   help='Append log messages to this file.')
    p.add_argument('--ui', choices=config.UIS, default=defaults['ui'],
                   help='How to ask for the passphrase.')
    p.add_argument('--pinentry-binary', default=defaults['pinentry_binary'],
                   help='Pinentry program used by "--ui pinentry".')
    p.add_argument('--tty', default=config.Configuration.tty,
                   help='Terminal used by "--ui tty".')
    p.add_argument('--title', default=None,
                   help='Dialog title used by "--ui pinentry".')
    if defaults['ui'] not in config.UIS:
        p.error('invalid {}: {!r} (choose from {})'.format(
            config.ENVIRON['ui'], defaults['ui'], ', '.join(config.UIS)))
    return p


def run(cfg, rx, tx):
    """Run a single pinentry session, returning the process exit code."""
    handler = session.Handler(ui=ui.create(cfg))
    try:
        handler.handle(rx=rx, tx=tx)
    except ui.Cancelled as e:
        log.info('cancelled: %s', e)
        return 1
    except (ParseError, escape.DecodingError) as e:
        log.error('invalid request: %s', e)
        return os.EX_DATAERR
    except session.SessionError as e:
        log.error('session failed: %s', e)
        return os.EX_DATAERR
    except Exception as e:  # pylint: disable=broad-except
        log.exception('pinentry failed: %s', e)
        return os.EX_SOFTWARE
    return os.EX_OK


def _main():
    p = create_parser()
    if argcomplete:
        argcomplete.autocomplete(p)

    # gpg-agent passes the standard pinentry flags (--display, --ttyname...)
    args, unknown = p.parse_known_args()
    util.setup_logging(verbosity=args.verbose, filename=args.log_file)
    if unknown:
        log.debug('ignoring arguments: %s', unknown)

    cfg = config.Configuration(**vars(args))
    log.debug('pid: %d, parent pid: %d', os.getpid(), os.getppid())
    sys.exit(run(cfg, rx=sys.stdin.buffer, tx=sys.stdout.buffer))


if __name__ == '__main__':
    _main()
