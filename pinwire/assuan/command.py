"""Decoder for inbound pinentry directives (one line -> one Command)."""
import logging
import re

from . import option
from .errors import (LINE_LIMIT, Empty, InvalidDuration, StringTooLong,
                     UnknownCommand)
from .. import util

log = logging.getLogger(__name__)

_SECONDS = re.compile(r'\+?[0-9]+')
_SECONDS_MAX = 2 ** 64 - 1


class Command(util.Variant):
    """A decoded pinentry directive."""


class Reset(Command):
    """RESET"""


class Quit(Command):
    """QUIT"""


class GetPin(Command):
    """GETPIN: show the dialog and return the secret."""


class Bye(Command):
    """BYE: end the session."""


class GetInfo(Command):
    """GETINFO <what>"""


class SetTitle(Command):
    """SETTITLE <text>"""


class Comment(Command):
    """# <free text>"""


class SetTimeOut(Command):
    """SETTIMEOUT <seconds>"""

    @property
    def seconds(self):
        return self.value


class SetPrompt(Command):
    """SETPROMPT <text>"""


class SetDesc(Command):
    """SETDESC <text>"""


class SetOk(Command):
    """SETOK <text>"""


class SetCancel(Command):
    """SETCANCEL <text>"""


class SetNotOk(Command):
    """SETNOTOK <text>"""


class SetError(Command):
    """SETERROR <text>"""


class SetRepeat(Command):
    """SETREPEAT"""


class SetQualityBar(Command):
    """SETQUALITYBAR"""


class SetQualityBarTT(Command):
    """SETQUALITYBAR_TT <text>"""


class SetGenPin(Command):
    """SETGENPIN"""


class SetGenPinTT(Command):
    """SETGENPIN_TT <text>"""


class SetKeyInfo(Command):
    """SETKEYINFO <keygrip>"""


class Option(Command):
    """OPTION <name>[=<value>], holding an option.OptionArgument."""


def _set_timeout(remainder):
    if not _SECONDS.fullmatch(remainder):
        raise InvalidDuration(remainder)
    seconds = int(remainder)
    if seconds > _SECONDS_MAX:
        raise InvalidDuration(remainder)
    return SetTimeOut(seconds)


def _flag(cls):
    return lambda _: cls()


# Text directives keep their payload, flag directives ignore it.
# Keywords are case-sensitive.
HANDLERS = {
    '#': Comment,
    'SETTIMEOUT': _set_timeout,
    'GETPIN': _flag(GetPin),
    'GETINFO': GetInfo,
    'QUIT': _flag(Quit),
    'BYE': _flag(Bye),
    'RESET': _flag(Reset),
    'SETTITLE': SetTitle,
    'SETDESC': SetDesc,
    'SETPROMPT': SetPrompt,
    'SETOK': SetOk,
    'SETCANCEL': SetCancel,
    'SETNOTOK': SetNotOk,
    'SETERROR': SetError,
    'SETREPEAT': _flag(SetRepeat),
    'SETQUALITYBAR': _flag(SetQualityBar),
    'SETQUALITYBAR_TT': SetQualityBarTT,
    'SETGENPIN': _flag(SetGenPin),
    'SETGENPIN_TT': SetGenPinTT,
    'SETKEYINFO': SetKeyInfo,
    'OPTION': lambda remainder: Option(option.parse(remainder)),
}


def parse(line):
    """
    Decode a single line (without its EOL) into a Command.

    Payload text is returned as-is: percent-escapes are not decoded here
    (see escape.unescape).
    """
    if not line:
        raise Empty(line)

    size = len(line.encode('utf-8'))
    if size > LINE_LIMIT:
        raise StringTooLong(size)

    keyword, _, remainder = line.partition(' ')
    handler = HANDLERS.get(keyword)
    if handler is None:
        log.debug('unknown request: %r', line)
        raise UnknownCommand(line)

    return handler(remainder)
