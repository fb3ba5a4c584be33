"""
Constants for cutword.

Tunable values shared by the dictionary builder, the segmentation engine
and the public API.
"""

# =============================================================================
# Dictionary
# =============================================================================

# Records with a lower frequency are skipped when building the dictionary
MIN_TERM_FREQUENCY = 2

# Appended after every unit in a trie key so only whole units can match
UNIT_SEPARATOR = "\x1f"


# =============================================================================
# Pseudo-term (fallback for positions no single-unit term covers)
# =============================================================================

PSEUDO_TERM_FREQUENCY = 1
PSEUDO_TERM_COST = 32.0
PSEUDO_TERM_POS = "x"


# =============================================================================
# Async API
# =============================================================================

DEFAULT_ASYNC_TIMEOUT = 30.0
ASYNC_MAX_WORKERS = 4
