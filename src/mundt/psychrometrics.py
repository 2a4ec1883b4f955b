"""Moist-air property functions used by the surface/zone bridge.

Ideal-gas density and cp follow ASHRAE Handbook Fundamentals (2017), ch. 1.
Saturation pressure uses the Magnus form with Alduchov & Eskridge (1996)
coefficients over water (t >= 0 C) and ice (t < 0 C).
"""

from __future__ import annotations

import math

from .constants import EPS_WATER, KELVIN, R_DRY_AIR

_CP_DRY = 1.00484e3
_CP_VAPOR = 1.85895e3
_RV_OVER_RA = 1.6078

_MAGNUS_WATER = (610.94, 17.625, 243.04)
_MAGNUS_ICE = (611.21, 22.587, 273.86)


def rho_air(pb: float, tdb: float, w: float) -> float:
    """Moist-air density [kg/m3] from barometric pressure [Pa], dry bulb [C]
    and humidity ratio [kg/kg]."""
    w = max(float(w), 0.0)
    return pb / (R_DRY_AIR * (tdb + KELVIN) * (1.0 + _RV_OVER_RA * w))


def cp_air(w: float, tdb: float) -> float:
    """Moist-air specific heat [J/(kg K)]. `tdb` is accepted for call-site
    symmetry with the host's property interface; the fit is linear in w only."""
    return _CP_DRY + _CP_VAPOR * max(float(w), 0.0)


def saturation_pressure(t: float) -> float:
    a, b, c = _MAGNUS_WATER if t >= 0.0 else _MAGNUS_ICE
    return a * math.exp(b * t / (t + c))


def hum_rat_from_dewpoint(tdp: float, pb: float) -> float:
    pv = saturation_pressure(tdp)
    if pv >= pb:
        raise ValueError(f"vapour pressure {pv:.1f} Pa exceeds barometric pressure {pb:.1f} Pa")
    return EPS_WATER * pv / (pb - pv)
