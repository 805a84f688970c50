"""
Unit tests for offline detection.
"""

from unittest.mock import MagicMock, patch

from src.utils.connectivity import is_online


@patch("src.utils.connectivity.socket.create_connection")
def test_online_when_connection_opens(mock_connect):
    mock_connect.return_value = MagicMock()
    assert is_online("example.org", 443, timeout=1) is True
    mock_connect.assert_called_once_with(("example.org", 443), timeout=1)


@patch("src.utils.connectivity.socket.create_connection")
def test_offline_on_os_error(mock_connect):
    mock_connect.side_effect = OSError("Network is unreachable")
    assert is_online("example.org", 443, timeout=1) is False


@patch("src.utils.connectivity.socket.create_connection")
def test_defaults_from_config(mock_connect):
    from src.config import config

    is_online()

    (host, port), = mock_connect.call_args[0]
    assert host == config.trivia.connectivity_host
    assert port == config.trivia.connectivity_port
