#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the hexdiff library.

This module centralizes the fixed values used across hexdiff: the memory
word layout, the numeric stand-in for absent words, CLI exit codes and
configuration file names.

Constants are organized by category:
1. Memory Layout - word stride and address units
2. Absent Values - the sentinel used by numeric output forms
3. CLI - exit codes and configuration discovery
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Memory Layout
# =============================================================================

# Byte distance between consecutive memory words in a MemorySequence
WORD_STRIDE = 4

# Bytes per word, packed little-endian
WORD_SIZE = 4

# Internal byte offsets are divided by this to get output addresses
# (the target format addresses memory in 16-bit units)
OUTPUT_ADDRESS_DIVISOR = 2

MAX_ADDRESS = 0xFFFFFFFF
MAX_VALUE = 0xFFFFFFFF

# Fill value for bytes missing from a partially populated word
PADDING_BYTE = 0xFF

# =============================================================================
# Absent Values
# =============================================================================

# Numeric stand-in for "no entry at this address" in rendered output.
# Only 24 bits wide, so a stored word equal to it renders identically.
SENTINEL = 0xFFFFFF

# =============================================================================
# CLI
# =============================================================================

OutputFormat = Literal["text", "json", "rich"]

EXIT_SUCCESS = 0
EXIT_ERROR = 1
EXIT_DEPENDENCY_ERROR = 2
EXIT_VALIDATION_ERROR = 3
EXIT_FILE_ERROR = 4
EXIT_PARSING_ERROR = 6
EXIT_RENDERING_ERROR = 7

CONFIG_ENV_VAR = "HEXDIFF_CONFIG"
CONFIG_FILENAMES = [".hexdiff.toml", ".hexdiff.yaml", ".hexdiff.yml", ".hexdiff.json"]
PYPROJECT_TOOL_SECTION = "hexdiff"

DEFAULT_LOG_LEVEL = "WARNING"
