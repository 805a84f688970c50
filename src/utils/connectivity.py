"""
Offline detection.

A cheap TCP reachability check used after a failed question fetch to
decide between "device is offline" and "the request itself failed".
"""

import logging
import socket
from typing import Optional

try:
    from ..config import config
except ImportError:
    from src.config import config

logger = logging.getLogger(__name__)


def is_online(
    host: Optional[str] = None,
    port: Optional[int] = None,
    timeout: Optional[float] = None,
) -> bool:
    """
    Check whether the network is reachable.

    Args:
        host: Probe host (default: config.trivia.connectivity_host)
        port: Probe port (default: config.trivia.connectivity_port)
        timeout: Seconds to wait for the TCP handshake

    Returns:
        True if a TCP connection could be opened
    """
    host = host or config.trivia.connectivity_host
    port = port or config.trivia.connectivity_port
    timeout = timeout if timeout is not None else config.trivia.connectivity_timeout

    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError as e:
        logger.debug("Connectivity probe to %s:%s failed: %s", host, port, e)
        return False
