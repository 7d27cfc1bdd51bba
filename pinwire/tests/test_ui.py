import errno
import io
import os
import subprocess

import mock
import pytest

from .. import config, form, ui


class FakeProcess:
    def __init__(self, replies, exit_code=0):
        self.args = ['pinentry-fake']
        self.stdin = io.BytesIO()
        self.stdout = io.BytesIO(replies)
        self.exit_code = exit_code
        self.communicated = False

    def communicate(self):
        self.communicated = True

    def wait(self):
        return self.exit_code


def fake_popen(p):
    popen = mock.Mock(return_value=p)
    return popen


def test_tty(tmp_path):
    tty = tmp_path / 'tty'
    tty.write_text('')
    read = mock.Mock(return_value='s3cr3t')
    u = ui.TTYUI(tty=str(tty), read_func=read)
    f = form.Form(prompt='Passphrase:', ok_label='Unlock',
                  description='Unlock%0Akey 1234')
    assert u.get_passphrase(f) == 's3cr3t'
    assert tty.read_text() == 'Unlock\nkey 1234\n[Enter: Unlock, Ctrl-D: cancel]\n'
    (call,) = read.mock_calls
    assert call[1][1] == 'Passphrase: '


def test_tty_cancel(tmp_path):
    tty = tmp_path / 'tty'
    tty.write_text('')
    read = mock.Mock(side_effect=EOFError)
    u = ui.TTYUI(tty=str(tty), read_func=read)
    with pytest.raises(ui.Cancelled):
        u.get_passphrase(form.Form())

    read.side_effect = KeyboardInterrupt
    with pytest.raises(ui.Cancelled):
        u.get_passphrase(form.Form())


def test_tty_missing(tmp_path):
    read = mock.Mock()
    u = ui.TTYUI(tty=str(tmp_path / 'missing' / 'tty'), read_func=read)
    with pytest.raises(ui.Cancelled):
        u.get_passphrase(form.Form())
    assert read.mock_calls == []


def test_tty_never_reads_stdin(tmp_path):
    real_open = os.open

    def no_controlling_terminal(path, *args, **kwargs):
        if path == '/dev/tty':
            raise OSError(errno.ENXIO, 'No such device or address')
        return real_open(path, *args, **kwargs)

    tty = tmp_path / 'pts3'  # not a terminal, echo cannot be turned off
    tty.write_text('')
    stdin = io.StringIO('SETOK next-protocol-line\n')
    u = ui.TTYUI(tty=str(tty))
    with mock.patch.object(os, 'open', side_effect=no_controlling_terminal):
        with mock.patch('sys.stdin', stdin):
            with pytest.raises(ui.Cancelled):
                u.get_passphrase(form.Form())
    assert stdin.read() == 'SETOK next-protocol-line\n'


def test_read_secret_eof():
    stream = mock.Mock()
    stream.fileno.return_value = 7
    stream.readline.return_value = ''
    with mock.patch.object(ui, 'termios') as termios:
        termios.ECHO = 0x08
        termios.tcgetattr.return_value = [0, 0, 0, 0xff, 0, 0, []]
        with pytest.raises(EOFError):
            ui.read_secret(stream, 'PIN: ')
    # echo is restored after reading
    assert termios.tcsetattr.mock_calls[-1] == mock.call(
        7, termios.TCSAFLUSH, [0, 0, 0, 0xff, 0, 0, []])


def test_read_secret():
    stream = mock.Mock()
    stream.fileno.return_value = 7
    stream.readline.return_value = 's3cr3t\r\n'
    with mock.patch.object(ui, 'termios') as termios:
        termios.ECHO = 0x08
        termios.tcgetattr.return_value = [0, 0, 0, 0xff, 0, 0, []]
        assert ui.read_secret(stream, 'PIN: ') == 's3cr3t'
    first = termios.tcsetattr.mock_calls[0]
    assert first[1][2][3] == 0xff & ~0x08
    assert stream.write.mock_calls[0] == mock.call('PIN: ')


def test_options_getter():
    getter = ui.create_default_options_getter(
        environ={'GPG_TTY': '/dev/pts/1', 'DISPLAY': ':0'})
    assert getter() == ['ttyname=/dev/pts/1', 'display=:0']
    assert ui.create_default_options_getter(environ={})() == []


def test_pinentry():
    p = FakeProcess(b'OK Pleased to meet you\n' + b'OK\n' * 5 +
                    b'D pa%25ss\nOK\n')
    popen = fake_popen(p)
    u = ui.PinentryUI(binary='pinentry-curses',
                      options_getter=lambda: ['ttyname=/dev/pts/0'],
                      popen=popen)
    f = form.Form(description='Unlock%0Akey')
    assert u.get_passphrase(f) == 'pa%ss'
    assert p.stdin.getvalue() == b'''SETDESC Unlock%0Akey
SETPROMPT PIN:
SETOK OK
SETCANCEL cancel
OPTION ttyname=/dev/pts/0
GETPIN
BYE
'''
    assert p.communicated
    assert popen.mock_calls[0][2]['args'] == ['pinentry-curses']


def test_pinentry_title_and_empty_passphrase():
    p = FakeProcess(b'OK\n' + b'OK\n' * 4 + b'ERR 1 unsupported option\n' +
                    b'OK\n')
    u = ui.PinentryUI(options_getter=lambda: ['no-such-option'],
                      title='Unlock', popen=fake_popen(p))
    assert u.get_passphrase(form.Form()) == ''
    assert p.stdin.getvalue().startswith(b'SETTITLE Unlock\nSETPROMPT PIN:\n')


def test_pinentry_cancel():
    p = FakeProcess(b'OK\n' + b'OK\n' * 3 +
                    b'ERR 83886179 Operation cancelled <Pinentry>\n')
    u = ui.PinentryUI(options_getter=lambda: [], popen=fake_popen(p))
    with pytest.raises(ui.Cancelled):
        u.get_passphrase(form.Form())
    assert p.communicated


def test_pinentry_unexpected():
    p = FakeProcess(b'ERR 1 no\n')
    u = ui.PinentryUI(options_getter=lambda: [], popen=fake_popen(p))
    with pytest.raises(ui.UnexpectedError):
        u.get_passphrase(form.Form())


def test_pinentry_exit_code():
    p = FakeProcess(b'OK\n' * 4 + b'D x\nOK\n', exit_code=2)
    u = ui.PinentryUI(options_getter=lambda: [], popen=fake_popen(p))
    with pytest.raises(subprocess.CalledProcessError):
        u.get_passphrase(form.Form())


def test_create():
    u = ui.create(config.Configuration(ui='pinentry',
                                       pinentry_binary='pinentry-tty'))
    assert isinstance(u, ui.PinentryUI)
    assert u.binary == 'pinentry-tty'

    u = ui.create(config.Configuration())
    assert isinstance(u, ui.TTYUI)
    assert u.tty == '/dev/tty'
