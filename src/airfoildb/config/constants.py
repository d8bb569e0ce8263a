"""Configuration constants.

Values here are part of the on-disk format and are NOT user-configurable:
changing them would make existing databases unreadable. Configurable values
live in models.py (CatalogConfig).
"""

# =============================================================================
# Database Layout
# =============================================================================

DEFAULT_INDEX_FILE = "index.csv"
"""Name of the index file when none is given."""

DEFAULT_EXTENSION = ".csv"
"""Extension appended to derived curve-file names."""

DEFAULT_DECIMAL_REPLACEMENT = "p"
"""Character substituted for '.' in derived file-name segments."""

DIR_XY = "xy"
DIR_CL = "Cl"
DIR_CD = "Cd"
DIR_CM = "Cm"
DIR_XUPSEP = "xupsep"
DIR_XLOSEP = "xlosep"

CATEGORY_DIRS = (DIR_XY, DIR_CL, DIR_CD, DIR_CM, DIR_XUPSEP, DIR_XLOSEP)
"""The six fixed per-category subdirectories, in creation order."""

# =============================================================================
# Tabular Format
# =============================================================================

DELIMITER = ","
LINE_TERMINATOR = "\n"

LINE_BREAKS = frozenset("\n\r\x0b\x0c\x1c\x1d\x1e\x85\u2028\u2029")
"""Every character str.splitlines() breaks on. None may appear in a cell."""

PATH_SEPARATORS = frozenset("/\\")
"""Not allowed in names that become curve-file paths."""

HEADER_WORD_JOIN = "_"
"""Replacement for spaces when a header label must be a single word."""

# =============================================================================
# Config Files
# =============================================================================

LOCAL_CONFIG_NAME = "airfoildb.yaml"
"""Per-database config file, looked up in the database root."""
