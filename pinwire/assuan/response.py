"""Encoder for outbound pinentry replies."""
from .. import util

REDACTED = '<SECURE>'


class Response(util.Variant):
    """A reply line sent back to the caller."""


class Ok(Response):
    """Directive accepted."""


class OkHello(Response):
    """Greeting, sent once before any directive is read."""


class Data(Response):
    """Secret payload; never rendered in diagnostics."""

    def __repr__(self):
        return 'Data({})'.format(REDACTED)

    def __str__(self):
        return 'D ' + REDACTED


def encode(response):
    """
    Serialize a Response into a single wire line (without EOL).

    Data payloads are written verbatim, without Assuan escaping.
    """
    if isinstance(response, Data):
        return 'D ' + response.value
    if isinstance(response, OkHello):
        return 'OK Please go ahead'
    if isinstance(response, Ok):
        return 'OK'
    raise TypeError('cannot encode {!r}'.format(response))
