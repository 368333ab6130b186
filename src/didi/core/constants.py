"""
DIDI format constants, magic number and struct layouts.
"""
import struct

# Magic number
MAGIC = b"DIDI"
VERSION = 1
SUPPORTED_VERSIONS = frozenset({VERSION})

# Struct formats
# Header prefix: magic(4) + version(1) + search_string_length(1) = 6 bytes
HEADER_PREFIX_STRUCT = struct.Struct("<4sBB")

# Contains flag: 1 byte, 0 or 1
FLAG_STRUCT = struct.Struct("<B")

# Sizes
HEADER_PREFIX_SIZE = HEADER_PREFIX_STRUCT.size  # 6 bytes
FLAG_SIZE = FLAG_STRUCT.size  # 1 byte
MIN_HEADER_SIZE = HEADER_PREFIX_SIZE + FLAG_SIZE  # 7 bytes (empty search string)

# Validation constants
MAX_SEARCH_STRING_LENGTH = 255  # Max search string bytes (uint8)
MAX_HEADER_SIZE = MIN_HEADER_SIZE + MAX_SEARCH_STRING_LENGTH  # 262 bytes

# RLE: one decimal digit per count, longer runs are split
MAX_RUN_LENGTH = 9

# Full reads refuse payloads above this size (default: 100 MB)
DEFAULT_MAX_PAYLOAD_SIZE = 100 * 1024 * 1024

# File extension
EXTENSION = ".didi"
