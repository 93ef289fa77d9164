"""
MemoPad — Server Address Detection
===================================

What:  Works out which host/port the server binds to and advertises.
How:   HOST/PORT from settings win. Without HOST, local IPv4 addresses are
       collected and the first non-private one (a public address) is
       preferred, then the first private one, then "localhost".
Who:   Used by the application factory (OpenAPI servers, /server-info) and
       by the `memopad` console script (uvicorn bind address).
"""

import ipaddress
import logging
import socket
from typing import Iterable, List, Optional

from memopad.config import Settings
from memopad.schemas.memo import ServerInfo

logger = logging.getLogger(__name__)

# RFC 1918 private ranges
PRIVATE_NETWORKS = (
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
)

# Never contacted: connecting a UDP socket only selects a route
_PROBE_ADDRESS = ("203.0.113.1", 80)


def is_private_ip(ip: str) -> bool:
    """True if `ip` is an IPv4 address inside an RFC 1918 range."""
    try:
        address = ipaddress.IPv4Address(ip)
    except ValueError:
        return False
    return any(address in network for network in PRIVATE_NETWORKS)


def _is_external(ip: str) -> bool:
    """Any usable IPv4 address except loopback; link-local 169.254/16 counts."""
    try:
        address = ipaddress.IPv4Address(ip)
    except ValueError:
        return False
    return not (address.is_loopback or address.is_unspecified)


def local_ipv4_addresses() -> List[str]:
    """
    Non-loopback IPv4 addresses of this machine, in discovery order.

    Sources:
        1. The address the OS would route outbound traffic from
        2. Addresses the machine's hostname resolves to
    """
    found: List[str] = []

    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as probe:
            probe.connect(_PROBE_ADDRESS)
            found.append(probe.getsockname()[0])
    except OSError as e:
        logger.debug("Outbound address probe failed: %s", e)

    try:
        infos = socket.getaddrinfo(socket.gethostname(), None, socket.AF_INET)
        found.extend(info[4][0] for info in infos)
    except OSError as e:
        logger.debug("Hostname resolution failed: %s", e)

    unique: List[str] = []
    for ip in found:
        if ip not in unique and _is_external(ip):
            unique.append(ip)
    return unique


def detect_server_info(
    config: Settings,
    addresses: Optional[Iterable[str]] = None,
) -> ServerInfo:
    """
    Resolve the advertised server address.

    Args:
        config:    Settings providing HOST, PORT and APP_ENV
        addresses: Candidate local IPv4 addresses; discovered when omitted

    Returns:
        ServerInfo with host, port, local/public IPs and environment.
    """
    if config.host:
        return ServerInfo(
            host=config.host,
            port=config.port,
            local_ip=config.host,
            public_ip=None,
            environment=config.app_env,
        )

    if addresses is None:
        addresses = local_ipv4_addresses()

    local_ip = "localhost"
    public_ip: Optional[str] = None
    for ip in addresses:
        if not is_private_ip(ip):
            public_ip = ip
            break
        if local_ip == "localhost":
            local_ip = ip

    return ServerInfo(
        host=public_ip or local_ip,
        port=config.port,
        local_ip=local_ip,
        public_ip=public_ip,
        environment=config.app_env,
    )


def server_urls(info: ServerInfo) -> List[dict]:
    """
    OpenAPI `servers` entries for the detected address.

    Primary host first, then localhost, then the public and private
    addresses when they differ from the primary host.
    """
    servers = [
        {
            "url": f"http://{info.host}:{info.port}",
            "description": "Public server (external access)" if info.public_ip else "MemoPad server",
        },
        {"url": f"http://localhost:{info.port}", "description": "Local development server"},
    ]
    if info.public_ip and info.public_ip != info.host:
        servers.append({"url": f"http://{info.public_ip}:{info.port}", "description": "Public IP server"})
    if info.local_ip not in (info.host, "localhost"):
        servers.append({"url": f"http://{info.local_ip}:{info.port}", "description": "Private IP server"})
    return servers
