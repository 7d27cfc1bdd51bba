"""Various I/O and logging utilities."""
import io
import logging

from .assuan import errors

log = logging.getLogger(__name__)


class Variant:
    """
    Base class for closed tagged-union values.

    Two values are equal when they have the same concrete class and payload.
    Flag variants carry no payload (``value`` is None).
    """

    __slots__ = ('value',)

    def __init__(self, value=None):
        """C-tor."""
        self.value = value

    def __eq__(self, other):
        return type(self) is type(other) and self.value == other.value

    def __hash__(self):
        return hash((type(self), self.value))

    def __repr__(self):
        name = type(self).__name__
        if self.value is None:
            return '{}()'.format(name)
        return '{}({!r})'.format(name, self.value)


def sendline(stream, msg, confidential=False):
    """Write a text line (followed by EOL) and flush it."""
    log.debug('<- %r', ('<snip>' if confidential else msg))
    stream.write(msg.encode('utf-8') + b'\n')
    stream.flush()


def recvline(stream, limit=None):
    """
    Read a single line from a binary stream, without its line terminator.

    Returns None on EOF. A trailing CR (i.e. CRLF framing) is dropped too.
    Raises StringTooLong as soon as the line exceeds `limit` bytes
    (not counting the CR), without reading the rest of it.
    """
    reply = io.BytesIO()

    while True:
        c = stream.read(1)
        if not c:
            if not reply.getvalue():
                return None  # stream is closed
            break  # last line is missing its EOL

        if c == b'\n':
            break
        reply.write(c)
        if limit is not None and reply.tell() > limit + 1:
            raise errors.StringTooLong(reply.tell())

    result = reply.getvalue()
    if result.endswith(b'\r'):
        result = result[:-1]
    log.debug('-> %r', result)
    return result


def setup_logging(verbosity, filename=None):
    """Configure logging for this tool."""
    levels = [logging.WARNING, logging.INFO, logging.DEBUG]
    level = levels[min(verbosity, len(levels) - 1)]
    logging.root.setLevel(level)

    fmt = logging.Formatter('%(asctime)s %(levelname)-12s %(message)-100s '
                            '[%(filename)s:%(lineno)d]')
    hdlr = logging.StreamHandler()  # stderr (stdout carries the protocol)
    hdlr.setFormatter(fmt)
    logging.root.addHandler(hdlr)

    if filename:
        hdlr = logging.FileHandler(filename, 'a')
        hdlr.setFormatter(fmt)
        logging.root.addHandler(hdlr)
