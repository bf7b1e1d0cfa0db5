#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
OIF411 pump efficiency correction (Cef)

The ECC ozone sensor pump loses efficiency as ambient pressure drops. The
correction factor is a piecewise-linear function of pressure, tabulated for
the ECC-6A sensor with a 3.0 cm^3 pump volume. These nominal values are used
for every OIF411 sounding.

Outside the tabulated range the nearest endpoint factor is used.
"""

from typing import Sequence

import numpy as np

# Pressure nodes (hPa) and matching correction factors
OIF411_CEF_PRESSURE = (0, 2, 3, 5, 10, 20, 30, 50, 100, 200, 300, 500, 1000, 1100)
OIF411_CEF = (1.171, 1.171, 1.131, 1.092, 1.055, 1.032, 1.022, 1.015, 1.011, 1.008, 1.006, 1.004, 1, 1)


def lerp(x: float, y: float, a: float) -> float:
    """Linear interpolation between x and y, a in [0, 1]"""
    return x * (1 - a) + y * a


def _validate_table(pressures: Sequence[float], factors: Sequence[float]) -> np.ndarray:
    p = np.asarray(pressures, dtype=float)
    if p.ndim != 1 or p.size < 2:
        raise ValueError("Calibration table needs at least two pressure nodes")
    if len(factors) != p.size:
        raise ValueError(
            f"Calibration table length mismatch: {p.size} pressures, {len(factors)} factors"
        )
    if not np.all(np.diff(p) > 0):
        raise ValueError("Calibration pressures must be strictly increasing")
    return p


def _interpolate(pressure: float, nodes: np.ndarray, factors: Sequence[float]) -> float:
    # nodes must come from _validate_table
    if pressure <= nodes[0]:
        return float(factors[0])
    if pressure >= nodes[-1]:
        return float(factors[-1])

    # First node strictly above the requested pressure
    i = int(np.searchsorted(nodes, pressure, side="right"))
    if 1 <= i < nodes.size:
        a = (pressure - nodes[i - 1]) / (nodes[i] - nodes[i - 1])
        return float(lerp(factors[i - 1], factors[i], a))

    # Only reachable for NaN input
    return 1.0


def get_cef(pressure: float, pressures: Sequence[float], factors: Sequence[float]) -> float:
    """
    Interpolate a pump efficiency correction from a calibration table.

    Args:
        pressure: Ambient pressure, same unit as the table (not validated)
        pressures: Strictly increasing pressure nodes
        factors: Correction factor at each node

    Returns:
        Correction factor. Values at or beyond either end of the table are
        clamped to the endpoint factor.

    Raises:
        ValueError: if the table itself is malformed
    """
    return _interpolate(pressure, _validate_table(pressures, factors), factors)


# Checked once at import
_OIF411_NODES = _validate_table(OIF411_CEF_PRESSURE, OIF411_CEF)


def get_oif411_cef(pressure: float) -> float:
    """Pump efficiency correction for an OIF411 / ECC-6A (3.0 cm^3) at the given pressure (hPa)"""
    return _interpolate(pressure, _OIF411_NODES, OIF411_CEF)
