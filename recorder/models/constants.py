"""Constants shared by the resolver, transfer and home modules."""

from enum import IntEnum

# Terminal fallbacks
LOOPBACK_ADDRESS = "127.0.0.1"
LOCALHOST_NAME = "localhost"
DEFAULT_PORT = 16000

# Connection probe used to discover the routed local address
DEFAULT_PROBE_HOSTS = ("www.google.com", "www.baidu.com")
DEFAULT_PROBE_PORT = 80
DEFAULT_PROBE_TIMEOUT = 2.0

# Listening socket probe
LISTEN_BACKLOG = 50

# Case-insensitive marker of virtualization-only adapters
HOST_ONLY_MARKER = "host-only"

# Download buffer
TRANSFER_CHUNK_SIZE = 4 * 1024

# Recorder home
DEFAULT_HOME_DIRNAME = ".ngrinder_recorder"
LOG_DIRNAME = "log"


class IPVersion(IntEnum):
    """IP protocol version of an address."""

    V4 = 4
    V6 = 6
