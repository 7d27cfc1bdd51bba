"""Decoder for the `OPTION <name>[=<value>]` pinentry directive."""
import logging

from .errors import UnknownOption
from .. import util

log = logging.getLogger(__name__)


class OptionArgument(util.Variant):
    """A recognized pinentry option (flags carry no value)."""


class ConstraintsEnforce(OptionArgument):
    """Passphrase constraints are enforced by the caller."""


class ConstraintsHintShort(OptionArgument):
    """Short description of the passphrase constraints."""


class ConstraintsHintLong(OptionArgument):
    """Long description of the passphrase constraints."""


class FormattedPassphrase(OptionArgument):
    """Show the passphrase in groups of characters."""


class FormattedPassphraseHint(OptionArgument):
    """Hint text for the formatted passphrase."""


class TtyName(OptionArgument):
    """Terminal device of the caller."""


class TtyType(OptionArgument):
    """Terminal type of the caller."""


class LcCType(OptionArgument):
    """LC_CTYPE locale of the caller."""


class LcMessages(OptionArgument):
    """LC_MESSAGES locale of the caller."""


class Display(OptionArgument):
    """X11 display of the caller."""


class DefaultOk(OptionArgument):
    """Localized label of the OK button."""


class DefaultCancel(OptionArgument):
    """Localized label of the cancel button."""


class DefaultPrompt(OptionArgument):
    """Localized default prompt."""


class DefaultYes(OptionArgument):
    """Localized label of the yes button."""


class DefaultNo(OptionArgument):
    """Localized label of the no button."""


class DefaultPwmngr(OptionArgument):
    """Localized label of the "save in password manager" checkbox."""


class DefaultCFVisi(OptionArgument):
    """Localized confirmation text for showing the passphrase."""


class DefaultTTVisi(OptionArgument):
    """Localized tooltip for showing the passphrase."""


class DefaultTTHide(OptionArgument):
    """Localized tooltip for hiding the passphrase."""


class DefaultCapsHint(OptionArgument):
    """Localized caps-lock warning."""


class TouchFile(OptionArgument):
    """File to touch when the dialog is closed."""


class Owner(OptionArgument):
    """Process and host owning the request."""


class AllowExternalPasswordCache(OptionArgument):
    """The passphrase may be stored in an external cache."""


class NoGrab(OptionArgument):
    """Do not grab keyboard focus."""


# Flags must appear without a value, all other options accept any value.
FLAGS = {
    'constraints-enforce': ConstraintsEnforce,
    'formatted-passphrase': FormattedPassphrase,
    'allow-external-password-cache': AllowExternalPasswordCache,
    'no-grab': NoGrab,
}

VALUED = {
    'constraints-hint-short': ConstraintsHintShort,
    'constraints-hint-long': ConstraintsHintLong,
    'formatted-passphrase-hint': FormattedPassphraseHint,
    'ttyname': TtyName,
    'ttytype': TtyType,
    'lc-ctype': LcCType,
    'lc-messages': LcMessages,
    'display': Display,
    'default-ok': DefaultOk,
    'default-cancel': DefaultCancel,
    'default-prompt': DefaultPrompt,
    'default-yes': DefaultYes,
    'default-no': DefaultNo,
    'default-pwmngr': DefaultPwmngr,
    'default-cf-visi': DefaultCFVisi,
    'default-tt-visi': DefaultTTVisi,
    'default-tt-hide': DefaultTTHide,
    'default-capshint': DefaultCapsHint,
    'touch-file': TouchFile,
    'owner': Owner,
}


def parse(text):
    """
    Parse the remainder of an OPTION directive into an OptionArgument.

    Raise UnknownOption for names (or flag values) missing from the tables.
    """
    name, _, value = text.partition('=')
    if name in FLAGS and not value:
        return FLAGS[name]()
    if name in VALUED:
        return VALUED[name](value)
    log.debug('unknown option: %r', text)
    raise UnknownOption(text)
