"""Prompt description, folded from the accumulated directives."""
import collections

from .assuan import command

Form = collections.namedtuple(
    'Form', ['prompt', 'ok_label', 'cancel_label', 'description'])
Form.__new__.__defaults__ = ('PIN:', 'OK', 'cancel', None)

# Directives that set a Form field; everything else is ignored by fold().
FIELDS = {
    command.SetPrompt: 'prompt',
    command.SetOk: 'ok_label',
    command.SetCancel: 'cancel_label',
    command.SetDesc: 'description',
}


def fold(commands):
    """Build a Form from commands (left to right, last one wins)."""
    fields = {}
    for cmd in commands:
        name = FIELDS.get(type(cmd))
        if name is not None:
            fields[name] = cmd.value
    return Form(**fields)
