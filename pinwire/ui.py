"""UIs for passphrase entry, consuming the session's Form."""

import io
import logging
import os
import subprocess
import termios

from .assuan import escape

log = logging.getLogger(__name__)


class Cancelled(Exception):
    """The user dismissed the dialog."""


class UnexpectedError(Exception):
    """Unexpected response from a pinentry program."""


def read_secret(stream, prompt):
    """Read a line from a terminal stream, with echo turned off."""
    fd = stream.fileno()
    try:
        old = termios.tcgetattr(fd)
    except termios.error as e:
        raise Cancelled('cannot control echo: {}'.format(e)) from e

    new = list(old)
    new[3] &= ~termios.ECHO  # lflags
    stream.write(prompt)
    stream.flush()
    try:
        termios.tcsetattr(fd, termios.TCSAFLUSH, new)
        line = stream.readline()
    finally:
        termios.tcsetattr(fd, termios.TCSAFLUSH, old)
        stream.write('\n')
        stream.flush()

    if not line:
        raise EOFError
    return line.rstrip('\r\n')


class TTYUI:
    """Ask for the passphrase on a terminal (never on stdin)."""

    def __init__(self, tty='/dev/tty', read_func=read_secret):
        """C-tor."""
        self.tty = tty
        self.read = read_func

    def _open(self):
        try:
            fd = os.open(self.tty, os.O_RDWR | os.O_NOCTTY)
        except OSError as e:
            raise Cancelled('cannot open {}: {}'.format(self.tty, e)) from e
        return io.TextIOWrapper(io.FileIO(fd, 'r+'), encoding='utf-8')

    def get_passphrase(self, form):
        """Show the form and read the passphrase (without echo)."""
        with self._open() as stream:
            if form.description:
                stream.write(escape.unescape(form.description) + '\n')
            stream.write('[Enter: {}, Ctrl-D: {}]\n'.format(
                escape.unescape(form.ok_label),
                escape.unescape(form.cancel_label)))
            stream.flush()
            prompt = escape.unescape(form.prompt) + ' '
            try:
                return self.read(stream, prompt)
            except (EOFError, KeyboardInterrupt) as e:
                raise Cancelled('cancelled on {}'.format(self.tty)) from e

    def bye(self):
        """Nothing to tear down."""
        log.debug('bye')


def create_default_options_getter(environ=None):
    """Return current TTY and DISPLAY settings for the pinentry program."""
    if environ is None:
        environ = os.environ
    options = []
    ttyname = environ.get('GPG_TTY')
    if ttyname is not None:
        options.append('ttyname={}'.format(ttyname))

    display = environ.get('DISPLAY')
    if display is not None:
        options.append('display={}'.format(display))
    else:
        log.warning('DISPLAY not defined')

    log.info('using %s for pinentry options', options)
    return lambda: options


def write(p, line):
    """Send and flush a single line to the subprocess' stdin."""
    log.debug('%s <- %r', p.args, line)
    p.stdin.write(line.encode('utf-8') + b'\n')
    p.stdin.flush()


def expect(p, prefixes, confidential=False):
    """Read a line and return it without required prefix."""
    resp = p.stdout.readline().decode('utf-8').rstrip('\r\n')
    log.debug('%s -> %r', p.args, resp if not confidential else '********')
    for prefix in prefixes:
        if resp.startswith(prefix):
            return prefix, resp[len(prefix):]
    raise UnexpectedError(resp)


def interact(form, binary, options, title=None, popen=subprocess.Popen):
    """Use another pinentry program to ask the user for the passphrase."""
    p = popen(args=[binary],
              stdin=subprocess.PIPE,
              stdout=subprocess.PIPE,
              env=os.environ)
    try:
        expect(p, ['OK'])

        requests = [
            ('SETTITLE', escape.serialize(title) if title else None),
            ('SETDESC', form.description),
            ('SETPROMPT', form.prompt),
            ('SETOK', form.ok_label),
            ('SETCANCEL', form.cancel_label),
        ]
        for keyword, text in requests:
            if text:
                # Form text is still escaped, as received from the caller.
                write(p, '{} {}'.format(keyword, text))
                expect(p, ['OK'])

        log.debug('setting %d options', len(options))
        for opt in options:
            write(p, 'OPTION ' + opt)
            expect(p, ['OK', 'ERR'])

        write(p, 'GETPIN')
        prefix, payload = expect(p, ['D ', 'OK', 'ERR'], confidential=True)
        if prefix == 'ERR':
            raise Cancelled(payload.strip())
        pin = ''
        if prefix == 'D ':
            pin = escape.unescape(payload)
            expect(p, ['OK'])
        write(p, 'BYE')
    finally:
        p.communicate()  # close stdin and wait for the process to exit

    exit_code = p.wait()
    if exit_code:
        raise subprocess.CalledProcessError(exit_code, binary)
    return pin


class PinentryUI:
    """Forward the Form to another pinentry program (e.g. pinentry-curses)."""

    def __init__(self, binary='pinentry', options_getter=None, title=None,
                 popen=subprocess.Popen):
        """C-tor."""
        self.binary = binary
        self.popen = popen
        if options_getter is None:
            options_getter = create_default_options_getter()
        self.options_getter = options_getter
        self.title = title

    def get_passphrase(self, form):
        """Ask the user for passphrase."""
        return interact(form=form,
                        binary=self.binary,
                        options=self.options_getter(),
                        title=self.title,
                        popen=self.popen)

    def bye(self):
        """No pinentry program is running between sessions."""
        log.debug('bye')


def create(config):
    """Build the UI collaborator selected by the configuration."""
    if config.ui == 'pinentry':
        return PinentryUI(binary=config.pinentry_binary, title=config.title)
    return TTYUI(tty=config.tty)
