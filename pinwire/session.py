"""
Pinentry session: a pure reducer over inbound lines, and its I/O driver.

The reducer (start/step/complete) only computes transitions; Handler
performs the blocking reads/writes and hands events to the UI.
"""
import collections
import logging
import re

from . import form, util
from .assuan import command
from .assuan.errors import LINE_LIMIT, ParseError
from .assuan.response import Data, Ok, OkHello, encode

log = logging.getLogger(__name__)

_RESERVED = re.compile(r'[%\r\n]')


class SessionError(Exception):
    """Pinentry session failed."""


class InputError(SessionError):
    """Reading (or decoding) an inbound line failed."""


class OutputError(SessionError):
    """Writing a reply failed."""


class Event(util.Variant):
    """Notification for the UI collaborator."""


class Bye(Event):
    """The caller ended the session."""


class FormReady(Event):
    """A Form is ready to be shown (holds a form.Form)."""


class Accumulating(util.Variant):
    """Reading directives, holding the (immutable) tuple of pending ones."""

    @property
    def pending(self):
        return self.value


class AwaitingPassphrase(util.Variant):
    """GETPIN was received, waiting for the UI to return a passphrase."""


class Terminated(util.Variant):
    """No more directives or replies."""


TERMINATED = Terminated()

Transition = collections.namedtuple('Transition', ['state', 'replies', 'event'])


def start():
    """Initial transition: greet the caller, nothing pending yet."""
    return Transition(Accumulating(()), (OkHello(),), None)


def step(state, line):
    """
    Apply a single inbound line to an Accumulating state.

    ParseError is propagated to the caller (the session is over).
    """
    if not isinstance(state, Accumulating):
        raise SessionError('{!r} does not accept directives'.format(state))

    cmd = command.parse(line)
    if isinstance(cmd, command.GetPin):
        prompt = form.fold(state.pending)
        return Transition(AwaitingPassphrase(prompt), (), FormReady(prompt))
    if isinstance(cmd, command.Bye):
        # Pending directives are dropped: BYE never shows a Form.
        return Transition(TERMINATED, (Ok(),), Bye())
    return Transition(Accumulating(state.pending + (cmd,)), (Ok(),), None)


def complete(state, passphrase):
    """Reply with the passphrase entered for an AwaitingPassphrase state."""
    if not isinstance(state, AwaitingPassphrase):
        raise SessionError('{!r} does not expect a passphrase'.format(state))
    return Transition(TERMINATED, (Data(passphrase), Ok()), None)


def readline(rx):
    """Read a single UTF-8 line, or None on EOF."""
    try:
        line = util.recvline(rx, limit=LINE_LIMIT)
    except OSError as e:
        raise InputError('error {} while reading input'.format(e)) from e
    if line is None:
        return None
    try:
        return line.decode('utf-8')
    except UnicodeDecodeError as e:
        raise InputError('invalid UTF-8 input: {}'.format(e)) from e


def reply(tx, response):
    """Encode and send a single reply."""
    if isinstance(response, Data) and _RESERVED.search(response.value):
        log.warning('secret contains %%, CR or LF, sending it unescaped')
    try:
        util.sendline(tx, encode(response),
                      confidential=isinstance(response, Data))
    except OSError as e:
        raise OutputError('error {} while writing output'.format(e)) from e


class Handler:
    """Drive a pinentry session over a pair of binary streams."""

    def __init__(self, ui):
        """C-tor."""
        self.ui = ui
        self.state = None

    def _apply(self, tx, transition):
        self.state = transition.state
        for response in transition.replies:
            reply(tx, response)

    def handle(self, rx, tx):
        """
        Run a single session: greet, accumulate, hand off and reply.

        Returns when the session is terminated. Decode, I/O and UI
        cancellation errors are raised to the caller.
        """
        try:
            self._run(rx, tx)
        finally:
            self.state = TERMINATED

    def _run(self, rx, tx):
        self._apply(tx, start())

        while isinstance(self.state, Accumulating):
            try:
                line = readline(rx)
            except ParseError as e:
                log.error('invalid request: %s', e)
                raise
            if line is None:
                log.info('input closed before GETPIN/BYE')
                return

            try:
                transition = step(self.state, line)
            except ParseError as e:
                log.error('invalid request %r: %s', line, e)
                raise

            if isinstance(transition.event, Bye):
                log.debug('bye after %d directives', len(self.state.pending))
                self.ui.bye()
                self._apply(tx, transition)
            elif isinstance(transition.event, FormReady):
                self._apply(tx, transition)
                log.debug('showing %r', transition.event.value)
                passphrase = self.ui.get_passphrase(transition.event.value)
                self._apply(tx, complete(self.state, passphrase))
            else:
                self._apply(tx, transition)
