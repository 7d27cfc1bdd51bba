"""Configuration class."""

import os

UIS = ('tty', 'pinentry')


class Configuration:
    verbose = 0
    log_file = None

    # UI collaborator, one of UIS
    ui = 'tty'
    tty = '/dev/tty'
    pinentry_binary = 'pinentry'  # used by the 'pinentry' UI
    title = None

    def __init__(self, **kwargs):
        self.__dict__.update(**kwargs)
        assert self.ui in UIS, self.ui


# Environment variables used as defaults for the command-line flags.
ENVIRON = {
    'log_file': 'PINWIRE_LOG_FILE',
    'ui': 'PINWIRE_UI',
    'pinentry_binary': 'PINWIRE_PINENTRY',
}


def defaults(environ=None):
    """Return Configuration defaults, overridden by the environment."""
    if environ is None:
        environ = os.environ
    result = {}
    for key, name in ENVIRON.items():
        result[key] = environ.get(name, getattr(Configuration, key))
    return result
