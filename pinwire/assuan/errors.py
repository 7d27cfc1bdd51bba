"""Errors raised while decoding pinentry directives."""

LINE_LIMIT = 1000  # bytes, excluding the line terminator


class ParseError(Exception):
    """Inbound line could not be decoded into a directive."""


class Empty(ParseError):
    """Empty line."""

    def __str__(self):
        return 'empty line'


class StringTooLong(ParseError):
    """Line exceeds LINE_LIMIT bytes."""

    def __str__(self):
        return 'line too long, limit is {} bytes, received {} bytes'.format(
            LINE_LIMIT, self.args[0])


class UnknownCommand(ParseError):
    """Keyword is not a supported directive."""

    def __str__(self):
        return 'unknown command {!r}'.format(self.args[0])


class UnknownOption(ParseError):
    """OPTION name (or flag value) is not supported."""

    def __str__(self):
        return 'unknown OPTION {!r}'.format(self.args[0])


class InvalidDuration(ParseError):
    """SETTIMEOUT payload is not a non-negative number of seconds."""

    def __str__(self):
        return 'invalid duration {!r}'.format(self.args[0])
