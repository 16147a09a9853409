"""Protocol constants for beacon frames."""

# Link-layer protocol identifier (ethertype). Deliberately unregistered.
ETHERTYPE_BEACON = 0xBEAC

# XOR mask applied to the length field. Same bit pattern as the ethertype,
# but an independent constant.
LENGTH_XOR_MASK = 0xBEAC

# Frame field sizes
LENGTH_FIELD_BYTES = 2
MAX_MESSAGE_LENGTH = 1498
MAX_PAYLOAD_LENGTH = LENGTH_FIELD_BYTES + MAX_MESSAGE_LENGTH  # 1500 = ethernet MTU

# Ethernet pads every payload to at least this many bytes
MIN_FRAME_PAYLOAD = 46

# Link-layer addressing
BROADCAST_ADDRESS = b"\xff\xff\xff\xff\xff\xff"
IFNAMSIZ = 16  # includes the trailing NUL

# Defaults
DEFAULT_MESSAGE = b"beacon"
DEFAULT_PERIOD_S = 1
DEFAULT_TIMEOUT_S = 4
DEFAULT_PATTERN = ".*$"
