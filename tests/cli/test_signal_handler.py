"""Unit tests for the signal handler module in the fuse CLI."""

import os
import signal
from unittest.mock import MagicMock, patch

import pytest

from filefuse.cli.signal_handler import HAS_SIGPIPE, SignalHandler, cleanup, setup_signal_handling, signal_handler

needs_sigpipe = pytest.mark.skipif(not HAS_SIGPIPE, reason="SIGPIPE not available on this platform")


@pytest.fixture
def mock_signal():
    with patch("signal.signal", autospec=True) as mock:
        yield mock


@pytest.fixture
def mock_os():
    with patch("filefuse.cli.signal_handler.os", autospec=True) as mock:
        mock.open.return_value = 123
        mock.dup2 = MagicMock()
        mock.devnull = "/dev/null"
        mock.O_WRONLY = os.O_WRONLY
        yield mock


@pytest.fixture
def fresh_signal_handler():
    """A SignalHandler independent of the shared instance."""
    return SignalHandler()


@pytest.fixture
def clean_shared_handler():
    signal_handler.reset()
    yield signal_handler
    signal_handler.reset()


def test_initial_state(fresh_signal_handler):
    assert not fresh_signal_handler.sigpipe_received.is_set()
    assert not fresh_signal_handler.sigint_received.is_set()
    assert not fresh_signal_handler.interrupted
    assert fresh_signal_handler.exit_code() is None


@needs_sigpipe
def test_handle_sigpipe(fresh_signal_handler, mock_signal):
    fresh_signal_handler.handle_sigpipe(signal.SIGPIPE, None)

    assert fresh_signal_handler.sigpipe_received.is_set()
    assert fresh_signal_handler.interrupted
    assert fresh_signal_handler.exit_code() == 141
    mock_signal.assert_called_once_with(signal.SIGPIPE, fresh_signal_handler.original_sigpipe_handler)


def test_handle_sigint(fresh_signal_handler, mock_signal):
    fresh_signal_handler.handle_sigint(signal.SIGINT, None)

    assert fresh_signal_handler.sigint_received.is_set()
    assert fresh_signal_handler.exit_code() == 130
    mock_signal.assert_called_once_with(signal.SIGINT, fresh_signal_handler.original_sigint_handler)


@needs_sigpipe
def test_sigpipe_takes_precedence(fresh_signal_handler, mock_signal):
    fresh_signal_handler.handle_sigint(signal.SIGINT, None)
    fresh_signal_handler.handle_sigpipe(signal.SIGPIPE, None)
    assert fresh_signal_handler.exit_code() == 141


def test_reset(fresh_signal_handler, mock_signal):
    fresh_signal_handler.handle_sigint(signal.SIGINT, None)
    fresh_signal_handler.reset()
    assert not fresh_signal_handler.interrupted


def test_setup_signal_handling(mock_signal):
    setup_signal_handling()

    mock_signal.assert_any_call(signal.SIGINT, signal_handler.handle_sigint)
    if HAS_SIGPIPE:
        mock_signal.assert_any_call(signal.SIGPIPE, signal_handler.handle_sigpipe)
        assert mock_signal.call_count == 2
    else:
        assert mock_signal.call_count == 1


def test_cleanup_with_no_signals(mock_os, clean_shared_handler):
    cleanup()

    mock_os.open.assert_not_called()
    mock_os.dup2.assert_not_called()


def test_cleanup_after_signal(mock_os, clean_shared_handler):
    clean_shared_handler.sigint_received.set()
    with patch("filefuse.cli.signal_handler.sys") as mock_sys:
        mock_sys.stdout.fileno.return_value = 1
        cleanup()

    mock_os.open.assert_called_once_with("/dev/null", os.O_WRONLY)
    mock_os.dup2.assert_called_once_with(123, 1)
