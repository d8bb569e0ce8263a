"""Polar accessor protocol and a tabulated implementation.

The catalog never computes polars; it reads them through PolarHandle.
TabulatedPolar covers the common case of polars that already exist as
tables, e.g. exported from XFOIL runs.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol, runtime_checkable

import pandas as pd

Curve = tuple[Sequence[float], Sequence[float]]


@runtime_checkable
class PolarHandle(Protocol):
    """Accessors the catalog consumes from a polar source."""

    def get_reynolds(self) -> float: ...

    def get_mach(self) -> float: ...

    def get_panel_count(self) -> int: ...

    def get_convergence_parameter(self) -> int: ...

    def get_geometry(self) -> Curve: ...

    def get_lift_curve(self) -> Curve: ...

    def get_drag_curve(self) -> Curve: ...

    def get_moment_curve(self) -> Curve: ...

    def get_upper_separation_curve(self) -> Curve: ...

    def get_lower_separation_curve(self) -> Curve: ...


@dataclass
class TabulatedPolar:
    """PolarHandle backed by in-memory sequences."""

    reynolds: float
    mach: float
    panel_count: int
    convergence_parameter: int
    geometry: Curve
    alpha: Sequence[float]
    cl: Sequence[float]
    cd: Sequence[float]
    cm: Sequence[float]
    xsep_upper: Sequence[float] = field(default_factory=list)
    xsep_lower: Sequence[float] = field(default_factory=list)

    def get_reynolds(self) -> float:
        return self.reynolds

    def get_mach(self) -> float:
        return self.mach

    def get_panel_count(self) -> int:
        return self.panel_count

    def get_convergence_parameter(self) -> int:
        return self.convergence_parameter

    def get_geometry(self) -> Curve:
        return self.geometry

    def get_lift_curve(self) -> Curve:
        return self.alpha, self.cl

    def get_drag_curve(self) -> Curve:
        return self.alpha, self.cd

    def get_moment_curve(self) -> Curve:
        return self.alpha, self.cm

    def get_upper_separation_curve(self) -> Curve:
        # No separation data means an empty curve, not a misaligned one
        return (self.alpha if self.xsep_upper else []), self.xsep_upper

    def get_lower_separation_curve(self) -> Curve:
        return (self.alpha if self.xsep_lower else []), self.xsep_lower


def load_polar_table(
    polar_csv: Path,
    geometry_csv: Path,
    *,
    reynolds: float,
    mach: float = 0.0,
    panel_count: int = 0,
    convergence_parameter: int = 0,
) -> TabulatedPolar:
    """Build a TabulatedPolar from CSV exports.

    ``polar_csv`` needs ``alpha``, ``cl``, ``cd`` and ``cm`` columns and may
    carry ``xsep_up`` and ``xsep_lo``. ``geometry_csv`` needs ``x`` and ``y``.
    Missing columns raise KeyError.
    """
    polar = pd.read_csv(polar_csv, skipinitialspace=True)
    contour = pd.read_csv(geometry_csv, skipinitialspace=True)

    def column(frame: pd.DataFrame, name: str) -> list[float]:
        return frame[name].astype(float).tolist()

    return TabulatedPolar(
        reynolds=reynolds,
        mach=mach,
        panel_count=panel_count,
        convergence_parameter=convergence_parameter,
        geometry=(column(contour, "x"), column(contour, "y")),
        alpha=column(polar, "alpha"),
        cl=column(polar, "cl"),
        cd=column(polar, "cd"),
        cm=column(polar, "cm"),
        xsep_upper=column(polar, "xsep_up") if "xsep_up" in polar else [],
        xsep_lower=column(polar, "xsep_lo") if "xsep_lo" in polar else [],
    )
