"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import sys
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))


@pytest.fixture
def database(tmp_path: Path) -> Path:
    """A freshly created, empty database."""
    from airfoildb.catalog.ops import create_database

    root = tmp_path / "db"
    create_database(root)
    return root


@pytest.fixture
def polar():
    """A small tabulated polar with separation data."""
    from airfoildb.catalog.polar import TabulatedPolar

    return TabulatedPolar(
        reynolds=999_999.2,
        mach=0.1,
        panel_count=160,
        convergence_parameter=9,
        geometry=([1.0, 0.5, 0.0, 0.5, 1.0], [0.0, 0.06, 0.0, -0.06, 0.0]),
        alpha=[-2.0, 0.0, 2.0],
        cl=[-0.22, 0.0, 0.22],
        cd=[0.0061, 0.0054, 0.0061],
        cm=[0.001, 0.0, -0.001],
        xsep_upper=[1.0, 1.0, 0.98],
        xsep_lower=[0.97, 1.0, 1.0],
    )


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo logging configuration done by a test (the CLI configures it)."""
    import logging

    import structlog

    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
