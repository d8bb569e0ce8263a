"""Canonical curve-file names derived from an entry's identifying fields.

    xy/      <airfoil>-npanels<N>-<diff><ext>
    Cl/      <airfoil>-Cl-re<R>-ma<M>-ncrit<C>-<diff><ext>
    ...
    xlosep/  <airfoil>-xlosep-re<R>-ma<M>-ncrit<C>-<diff><ext>

<R> is the Reynolds number rounded up to an integer. Every other numeric
segment is the value's index text with '.' replaced, so names stay portable.
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import Any

from airfoildb.config.constants import DEFAULT_DECIMAL_REPLACEMENT, DEFAULT_EXTENSION
from airfoildb.schema.values import FieldValue

# File field -> tag inserted after the airfoil name (geometry has none)
CATEGORY_TAGS: dict[str, str] = {
    "clfile": "Cl",
    "cdfile": "Cd",
    "cmfile": "Cm",
    "xupsepfile": "xupsep",
    "xlosepfile": "xlosep",
}


@dataclass(frozen=True)
class EntryFileNames:
    """Derived file name for every file field of one entry."""

    xyfile: str
    clfile: str
    cdfile: str
    cmfile: str
    xupsepfile: str
    xlosepfile: str

    def as_fields(self) -> dict[str, str]:
        return asdict(self)


def base_name(airfoilname: str) -> str:
    """Airfoil name with all whitespace removed."""
    return "".join(airfoilname.split())


def name_segment(value: Any, decimal_replacement: str = DEFAULT_DECIMAL_REPLACEMENT) -> str:
    tagged = FieldValue.infer(value)
    text = tagged.render() if tagged is not None else str(value)
    return text.replace(".", decimal_replacement)


def reynolds_segment(re: Any) -> str:
    return str(math.ceil(re.value if isinstance(re, FieldValue) else re))


def derive_file_names(
    airfoilname: str,
    *,
    re: Any,
    ma: Any,
    npanels: Any,
    ncrit: Any,
    diff: Any,
    extension: str = DEFAULT_EXTENSION,
    decimal_replacement: str = DEFAULT_DECIMAL_REPLACEMENT,
) -> EntryFileNames:
    """Derive all six curve-file names. Identical inputs give identical names."""
    name = base_name(airfoilname)
    diff_seg = name_segment(diff, decimal_replacement)
    suffix = (
        f"-re{reynolds_segment(re)}"
        f"-ma{name_segment(ma, decimal_replacement)}"
        f"-ncrit{name_segment(ncrit, decimal_replacement)}"
        f"-{diff_seg}{extension}"
    )
    names = {field_id: f"{name}-{tag}{suffix}" for field_id, tag in CATEGORY_TAGS.items()}
    return EntryFileNames(
        xyfile=f"{name}-npanels{name_segment(npanels, decimal_replacement)}-{diff_seg}{extension}",
        **names,
    )
