"""Percent-escaping of Assuan payload text ('%0A' <-> '\\n')."""
import string

_HEX_DIGITS = frozenset(string.hexdigits)


class DecodingError(ValueError):
    """Malformed percent-escape in Assuan text."""

    def __str__(self):
        return 'invalid hex representation in {!r}'.format(self.args[0])


def unescape(s):
    """
    Unescape Assuan text: every '%XY' is replaced by the character 0xXY.

    Raise DecodingError on the first '%' that is not followed by two
    hexadecimal digits.
    """
    result = []
    i = 0
    while i < len(s):
        c = s[i]
        if c == '%':
            hex_digits = s[i+1:i+3]
            if len(hex_digits) != 2 or not _HEX_DIGITS.issuperset(hex_digits):
                raise DecodingError(s)
            c = chr(int(hex_digits, 16))
            i += 2
        result.append(c)
        i += 1
    return ''.join(result)


def serialize(s):
    """Escape text according to Assuan protocol (for pinentry requests)."""
    for c in ['%', '\n', '\r']:
        s = s.replace(c, '%{:02X}'.format(ord(c)))
    return s
