"""Constants for response parsing.

Centralizes read limits so raw and structured parsing agree on sizes.
"""

# Response Size Limits
DEFAULT_READ_LIMIT_BYTES = 30 * 1024 * 1024  # 30 MiB
ERROR_CONTEXT_LIMIT_BYTES = 1024 * 1024  # 1 MiB

# Chunk size for streaming reads
DEFAULT_CHUNK_SIZE = 8192
