# almanac/core/tables.py
# -----------------------------------------------------------------------------
# Perturbation Coefficient Tables
#
# Sources:
#   • Explanatory Supplement to the Astronomical Ephemeris (1961), pp. 44-45
#     for nutation and the solar theory of Newcomb
#   • Brown's lunar theory (1919) in the improved form used for the
#     Improved Lunar Ephemeris
#   • Standish (1992) mean elements for Uranus, Neptune and Pluto
#
# Layout:
#   • Planetary series are sequences of (amplitude, phase, multipliers); a
#     term contributes amplitude * f(phase + Σ multiplier_j * argument_j).
#   • Lunar series are sequences of (coefficient, (i, j, k, m)); a term
#     contributes coefficient * f(i·l + j·l' + k·F + m·D), l, l', F and D
#     being the principal lunar arguments.
#   • Values are reproduced digit for digit; do not reformat them.
# -----------------------------------------------------------------------------

from __future__ import annotations

from typing import NamedTuple, Tuple

__all__ = [
    "SeriesTerm",
    "LunarTerm",
    "PlanetaryLunarTerm",
    "OrbitalElementTable",
    "SUN_ANOMALY_COS",
    "SUN_ANOMALY_SIN",
    "SUN_LONGITUDE_PLANETARY",
    "SUN_LONGITUDE_LUNAR",
    "SUN_LATITUDE_PLANETARY",
    "SUN_LATITUDE_LUNAR",
    "SUN_RADIUS_PLANETARY",
    "SUN_RADIUS_LUNAR",
    "MERCURY_LONGITUDE",
    "MERCURY_RADIUS",
    "VENUS_LONGITUDE",
    "VENUS_LATITUDE",
    "VENUS_RADIUS",
    "NUTATION_LONGITUDE",
    "NUTATION_OBLIQUITY",
    "NUTATION_LONGITUDE_SHORT",
    "NUTATION_OBLIQUITY_SHORT",
    "MOON_LONGITUDE",
    "MOON_LONGITUDE_PLANETARY",
    "MOON_LATITUDE_ARGUMENT",
    "MOON_LATITUDE_FACTOR",
    "MOON_LATITUDE_NODE",
    "MOON_PARALLAX",
    "URANUS_ELEMENTS",
    "NEPTUNE_ELEMENTS",
    "PLUTO_ELEMENTS",
]


class SeriesTerm(NamedTuple):
    amplitude: float
    phase: float
    multipliers: Tuple[int, ...]


class LunarTerm(NamedTuple):
    coefficient: float
    arguments: Tuple[int, int, int, int]


class PlanetaryLunarTerm(NamedTuple):
    """Lunar longitude term driven by planetary mean longitudes.

    ``planets`` multiplies (Earth, Venus, Jupiter, Mars, lunar node) in
    degrees; ``offset`` is a constant in degrees.
    """
    coefficient: float
    arguments: Tuple[int, int, int, int]
    planets: Tuple[int, int, int, int, int]
    offset: float


class OrbitalElementTable(NamedTuple):
    """Mean elements at an epoch with their rates per Julian century.

    Angles are in degrees; angle rates are in arcseconds per century.
    """
    epoch_day: float
    semi_major_axis: float
    eccentricity: float
    inclination: float
    ascending_node: float
    perihelion_longitude: float
    mean_longitude: float
    semi_major_axis_rate: float
    eccentricity_rate: float
    inclination_rate: float
    ascending_node_rate: float
    perihelion_longitude_rate: float
    mean_longitude_rate: float


def _series(*rows) -> Tuple[SeriesTerm, ...]:
    return tuple(SeriesTerm(a, p, m) for a, p, m in rows)


def _lunar(*rows) -> Tuple[LunarTerm, ...]:
    return tuple(LunarTerm(c, args) for c, args in rows)


# ───────────────────────────── Sun ─────────────────────────────

# Mean anomaly, cosine terms in (Mars, Earth, Venus, Jupiter).
SUN_ANOMALY_COS = _series(
    (-0.265, 0, (4, -7, 3, 0)),
    (3.760, 0, (-8, 4, 0, 3)),
    (0.200, 0, (15, -8, 0, 0)),
)

# Mean anomaly, sine terms in (Mars, Earth, Venus, Jupiter, 0.07884 T).
SUN_ANOMALY_SIN = _series(
    (-0.021, 0, (4, -7, 3, 0, 0)),
    (5.180, 0, (-8, 4, 0, 3, 0)),
    (1.882, 3.8991, (0, 13, -8, 0, 1)),
    (-0.030, 0, (15, -8, 0, 0, 0)),
)

# Longitude, cosine terms in (Mars, Earth, Venus, Jupiter, Saturn).
SUN_LONGITUDE_PLANETARY = _series(
    (0.075, 5.1766, (0, 0, 1, 0, 0)),
    (4.838, 5.2203, (0, -1, 1, 0, 0)),
    (0.074, 3.6285, (0, -2, 1, 0, 0)),
    (0.116, 2.5988, (0, -1, 2, 0, 0)),
    (5.526, 2.5885, (0, -2, 2, 0, 0)),
    (2.497, 5.5143, (0, -3, 2, 0, 0)),
    (0.044, 5.4350, (0, -4, 2, 0, 0)),
    (0.666, 3.1016, (0, -3, 3, 0, 0)),
    (1.559, 6.0258, (0, -4, 3, 0, 0)),
    (1.024, 5.5527, (0, -5, 3, 0, 0)),
    (0.210, 3.5989, (0, -4, 4, 0, 0)),
    (0.144, 3.4104, (0, -5, 4, 0, 0)),
    (0.152, 6.0004, (0, -6, 4, 0, 0)),
    (0.084, 4.1120, (0, -5, 5, 0, 0)),
    (0.037, 3.8711, (0, -6, 5, 0, 0)),
    (0.123, 3.4086, (0, -7, 5, 0, 0)),
    (0.154, 6.2762, (0, -8, 5, 0, 0)),
    (0.038, 4.6094, (0, -6, 6, 0, 0)),
    (0.020, 5.1313, (0, -7, 7, 0, 0)),
    (0.042, 4.5239, (0, -12, 8, 0, 0)),
    (0.032, 0.8517, (0, -14, 8, 0, 0)),
    (0.273, 3.7996, (-1, 1, 0, 0, 0)),
    (0.048, 4.5431, (-1, 0, 0, 0, 0)),
    (0.041, 6.0388, (-2, 3, 0, 0, 0)),
    (2.043, 6.0020, (-2, 2, 0, 0, 0)),
    (1.770, 3.4977, (-2, 1, 0, 0, 0)),
    (0.028, 2.5831, (-2, 0, 0, 0, 0)),
    (0.129, 5.1348, (-3, 3, 0, 0, 0)),
    (0.425, 5.9146, (-3, 2, 0, 0, 0)),
    (0.034, 1.2391, (-4, 4, 0, 0, 0)),
    (0.500, 1.8357, (-4, 3, 0, 0, 0)),
    (0.585, 5.8304, (-4, 2, 0, 0, 0)),
    (0.085, 0.9529, (-5, 4, 0, 0, 0)),
    (0.204, 1.7593, (-5, 3, 0, 0, 0)),
    (0.020, 3.2463, (-6, 5, 0, 0, 0)),
    (0.154, 3.9689, (-6, 4, 0, 0, 0)),
    (0.101, 1.6808, (-6, 3, 0, 0, 0)),
    (0.049, 3.0805, (-7, 5, 0, 0, 0)),
    (0.106, 3.8868, (-7, 4, 0, 0, 0)),
    (0.052, 6.0895, (-8, 5, 0, 0, 0)),
    (0.021, 3.7559, (-8, 4, 0, 0, 0)),
    (0.028, 5.2011, (-9, 6, 0, 0, 0)),
    (0.062, 6.0388, (-9, 5, 0, 0, 0)),
    (0.044, 1.8483, (-11, 6, 0, 0, 0)),
    (0.045, 3.9759, (-13, 7, 0, 0, 0)),
    (0.021, 5.3931, (-15, 9, 0, 0, 0)),
    (0.026, 1.9722, (-17, 9, 0, 0, 0)),
    (0.163, 3.4662, (0, 2, 0, -1, 0)),
    (7.208, 3.1334, (0, 1, 0, -1, 0)),
    (2.600, 4.5940, (0, 0, 0, -1, 0)),
    (0.073, 4.8223, (0, -1, 0, -1, 0)),
    (0.069, 1.4102, (0, 3, 0, -2, 0)),
    (2.731, 1.5210, (0, 2, 0, -2, 0)),
    (1.610, 1.9110, (0, 1, 0, -2, 0)),
    (0.073, 4.4087, (0, 0, 0, -2, 0)),
    (0.164, 2.9758, (0, 3, 0, -3, 0)),
    (0.556, 1.4425, (0, 2, 0, -3, 0)),
    (0.210, 1.7261, (0, 1, 0, -3, 0)),
    (0.044, 2.9356, (0, 3, 0, -4, 0)),
    (0.080, 1.3561, (0, 2, 0, -4, 0)),
    (0.419, 1.7555, (0, 1, 0, 0, -1)),
    (0.320, 4.7030, (0, 0, 0, 0, -1)),
    (0.108, 5.0719, (0, 2, 0, 0, -2)),
    (0.112, 5.1243, (0, 1, 0, 0, -2)),
    (0.021, 5.0440, (0, 2, 0, 0, -3)),
)

# Longitude, sine terms in (D, l, Earth).
SUN_LONGITUDE_LUNAR = _series(
    (6.454, 0, (1, 0, 0)),
    (0.177, 0, (1, 1, 0)),
    (-0.424, 0, (1, -1, 0)),
    (0.039, 0, (3, -1, 0)),
    (-0.064, 0, (1, 0, 1)),
    (0.172, 0, (1, 0, -1)),
)

# Latitude, cosine terms in (Earth, Venus, Jupiter).
SUN_LATITUDE_PLANETARY = _series(
    (-0.092, 1.6354, (-2, 1, 0)),
    (-0.067, 2.1468, (-3, 2, 0)),
    (-0.210, 2.6494, (-4, 2, 0)),
    (-0.166, 4.6338, (1, 0, -2)),
)

# Latitude, sine terms in (F, l, D).
SUN_LATITUDE_LUNAR = _series(
    (0.576, 0, (1, 0, 0)),
    (-0.047, 0, (1, -1, 0)),
    (0.021, 0, (-1, 0, 2)),
)

# Log radius, cosine terms in (Mars, Earth, Venus, Jupiter, Saturn).
SUN_RADIUS_PLANETARY = _series(
    (2.359e-6, 3.6607, (0, -1, 1, 0, 0)),
    (6.842e-6, 1.0180, (0, -2, 2, 0, 0)),
    (0.869e-6, 3.9567, (0, -3, 2, 0, 0)),
    (1.045e-6, 1.5332, (0, -3, 3, 0, 0)),
    (1.497e-6, 4.4691, (0, -4, 3, 0, 0)),
    (0.376e-6, 2.0295, (0, -4, 4, 0, 0)),
    (2.057e-6, 4.0941, (-2, 2, 0, 0, 0)),
    (0.215e-6, 4.3459, (-3, 2, 0, 0, 0)),
    (0.478e-6, 0.2648, (-4, 3, 0, 0, 0)),
    (0.208e-6, 1.9548, (0, 2, 0, -1, 0)),
    (7.067e-6, 1.5630, (0, 1, 0, -1, 0)),
    (0.244e-6, 5.9097, (0, 0, 0, -1, 0)),
    (4.026e-6, 6.2526, (0, 2, 0, -2, 0)),
    (1.459e-6, 0.3409, (0, 1, 0, -2, 0)),
    (0.281e-6, 1.4172, (0, 3, 0, -3, 0)),
    (0.803e-6, 6.1533, (0, 2, 0, -3, 0)),
    (0.429e-6, 0.1850, (0, 1, 0, 0, -1)),
)

# Log radius, cosine terms in (D, l, Earth).
SUN_RADIUS_LUNAR = _series(
    (13.36e-6, 0, (1, 0, 0)),
    (-1.33e-6, 0, (1, -1, 0)),
    (0.37e-6, 0, (1, 1, 0)),
    (0.36e-6, 0, (1, 0, -1)),
)

# ───────────────────────────── Mercury ─────────────────────────────

# Longitude, cosine terms in (Mercury, -perturber) for Venus, Earth, Jupiter, Saturn.
MERCURY_LONGITUDE = (
    _series(
        (0.013, 0.6807, (4, 1)),
        (0.048, 0.6283, (3, 1)),
        (0.185, 0.6231, (2, 1)),
        (0.711, 0.6191, (1, 1)),
        (0.285, 0.5784, (0, 1)),
        (0.075, 0.5411, (-1, 1)),
        (0.019, 0.5585, (-2, 1)),
        (0.010, 2.8449, (6, 2)),
        (0.039, 2.8117, (5, 2)),
        (0.147, 2.8135, (4, 2)),
        (0.552, 2.8126, (3, 2)),
        (2.100, 2.8126, (2, 2)),
        (3.724, 2.8046, (1, 2)),
        (0.729, 2.7883, (0, 2)),
        (0.186, 2.7890, (-1, 2)),
        (0.049, 2.7943, (-2, 2)),
        (0.013, 2.7402, (-3, 2)),
        (0.033, 1.8361, (5, 3)),
        (0.118, 1.8396, (4, 3)),
        (0.431, 1.8391, (3, 3)),
        (1.329, 1.8288, (2, 3)),
        (0.539, 4.8686, (1, 3)),
        (0.111, 4.8904, (0, 3)),
        (0.027, 4.8956, (-1, 3)),
        (0.012, 3.9794, (5, 4)),
        (0.056, 3.9636, (4, 4)),
        (0.294, 3.9910, (3, 4)),
        (0.484, 3.9514, (2, 4)),
        (0.070, 3.9270, (1, 4)),
        (0.018, 3.9270, (0, 4)),
        (0.013, 6.1261, (7, 5)),
        (0.050, 6.1052, (6, 5)),
        (0.185, 6.1069, (5, 5)),
        (0.685, 6.1011, (4, 5)),
        (2.810, 6.1062, (3, 5)),
        (7.356, 6.0699, (2, 5)),
        (1.471, 6.0685, (1, 5)),
        (0.375, 6.0687, (0, 5)),
        (0.098, 6.0720, (-1, 5)),
        (0.026, 6.0476, (-2, 5)),
        (0.062, 5.1540, (4, 6)),
        (0.122, 5.1191, (3, 6)),
        (0.011, 0.9076, (5, 7)),
        (0.074, 1.0123, (4, 7)),
        (0.106, 0.9372, (3, 7)),
        (0.017, 0.9425, (2, 7)),
        (0.020, 0.0506, (5, 8)),
        (0.052, 0.0384, (4, 8)),
        (0.052, 3.0281, (3, 8)),
        (0.012, 3.0543, (2, 8)),
        (0.011, 2.1642, (5, 9)),
        (0.016, 2.2340, (4, 9)),
        (0.040, 4.3912, (5, 10)),
        (0.080, 4.4262, (4, 10)),
        (0.016, 4.4506, (3, 10)),
    ),
    _series(
        (0.014, 1.0996, (3, 1)),
        (0.056, 1.1153, (2, 1)),
        (0.219, 1.1160, (1, 1)),
        (0.083, 1.0734, (0, 1)),
        (0.024, 0.9442, (-1, 1)),
        (0.018, 3.8432, (4, 2)),
        (0.070, 3.8293, (3, 2)),
        (0.256, 3.8230, (2, 2)),
        (0.443, 3.8132, (1, 2)),
        (0.080, 3.7647, (0, 2)),
        (0.020, 3.7734, (-1, 2)),
        (0.019, 0.0000, (3, 3)),
        (0.133, 0.1134, (2, 3)),
        (0.129, 6.2588, (1, 3)),
        (0.026, 6.2413, (0, 3)),
        (0.026, 2.6599, (4, 4)),
        (0.087, 2.6232, (3, 4)),
        (0.374, 2.6496, (2, 4)),
        (0.808, 2.5470, (1, 4)),
        (0.129, 2.5587, (0, 4)),
        (0.019, 2.5534, (-1, 4)),
        (0.012, 2.1642, (2, 5)),
    ),
    _series(
        (0.014, 3.1416, (4, 1)),
        (0.047, 3.1625, (3, 1)),
        (0.179, 3.1695, (2, 1)),
        (0.697, 3.1603, (1, 1)),
        (0.574, 4.1315, (0, 1)),
        (0.181, 4.2537, (-1, 1)),
        (0.047, 4.2481, (-2, 1)),
        (0.013, 4.2062, (-3, 1)),
        (0.018, 0.6650, (5, 2)),
        (0.069, 0.6405, (4, 2)),
        (0.253, 0.6449, (3, 2)),
        (0.938, 0.6454, (2, 2)),
        (3.275, 0.6458, (1, 2)),
        (0.499, 0.5569, (0, 2)),
        (0.119, 0.5271, (-1, 2)),
        (0.032, 0.5184, (-2, 2)),
        (0.030, 0.4939, (3, 3)),
        (0.106, 0.4171, (2, 3)),
        (0.353, 0.4510, (1, 3)),
        (0.056, 0.3840, (0, 3)),
        (0.013, 0.3142, (-1, 3)),
        (0.028, 0.2531, (1, 4)),
    ),
    _series(
        (0.034, 0.9512, (1, 1)),
        (0.060, 4.7962, (0, 1)),
        (0.028, 4.7124, (-1, 1)),
        (0.028, 4.1836, (3, 2)),
        (0.102, 4.1871, (2, 2)),
        (0.380, 4.1864, (1, 2)),
        (0.059, 4.1818, (0, 2)),
        (0.015, 4.2185, (-1, 2)),
        (0.012, 4.1713, (2, 3)),
        (0.050, 4.1870, (1, 3)),
    ),
)

# Log radius, cosine terms in (Mercury, -perturber) for Venus, Earth, Jupiter.
MERCURY_RADIUS = (
    _series(
        (0.218e-6, 5.3369, (2, 1)),
        (0.491e-6, 5.3281, (1, 1)),
        (0.172e-6, 2.1642, (0, 1)),
        (0.091e-6, 2.1084, (-1, 1)),
        (0.204e-6, 1.2460, (4, 2)),
        (0.712e-6, 1.2413, (3, 2)),
        (2.370e-6, 1.2425, (2, 2)),
        (0.899e-6, 1.2303, (1, 2)),
        (0.763e-6, 4.3633, (0, 2)),
        (0.236e-6, 4.3590, (-1, 2)),
        (0.163e-6, 0.2705, (4, 3)),
        (0.541e-6, 0.2710, (3, 3)),
        (1.157e-6, 0.2590, (2, 3)),
        (0.099e-6, 0.1798, (0, 3)),
        (0.360e-6, 2.4237, (3, 4)),
        (0.234e-6, 2.3740, (2, 4)),
        (0.253e-6, 4.5365, (5, 5)),
        (0.849e-6, 4.5293, (4, 5)),
        (2.954e-6, 4.5364, (3, 5)),
        (0.282e-6, 4.4581, (2, 5)),
        (1.550e-6, 1.3570, (1, 5)),
        (0.472e-6, 1.3561, (0, 5)),
        (0.135e-6, 1.3579, (-1, 5)),
        (0.081e-6, 3.5936, (4, 6)),
        (0.087e-6, 3.5500, (3, 6)),
        (0.087e-6, 5.7334, (4, 7)),
    ),
    _series(
        (0.181e-6, 5.8275, (1, 1)),
        (0.095e-6, 2.2427, (3, 2)),
        (0.319e-6, 2.2534, (2, 2)),
        (0.256e-6, 2.2403, (1, 2)),
        (0.157e-6, 4.8292, (2, 3)),
        (0.106e-6, 1.0332, (3, 4)),
        (0.397e-6, 1.0756, (2, 4)),
        (0.143e-6, 4.0980, (0, 4)),
    ),
    _series(
        (0.222e-6, 1.6024, (2, 1)),
        (0.708e-6, 1.5949, (1, 1)),
        (0.191e-6, 5.7914, (-1, 1)),
        (0.100e-6, 5.3564, (4, 2)),
        (0.347e-6, 5.3548, (3, 2)),
        (1.185e-6, 5.3576, (2, 2)),
        (3.268e-6, 5.3579, (1, 2)),
        (0.371e-6, 2.2148, (0, 2)),
        (0.160e-6, 2.1241, (-1, 2)),
        (0.134e-6, 5.1260, (2, 3)),
        (0.347e-6, 5.1620, (1, 3)),
    ),
)

# ───────────────────────────── Venus ─────────────────────────────

# Longitude, cosine terms in (Venus, Earth, Mars, Jupiter).
VENUS_LONGITUDE = _series(
    (4.889, 2.0788, (1, -1, 0, 0)),
    (11.261, 2.5870, (2, -2, 0, 0)),
    (7.128, 6.2384, (3, -3, 0, 0)),
    (3.446, 2.3721, (2, -3, 0, 0)),
    (1.034, 0.4632, (4, -4, 0, 0)),
    (1.575, 3.3847, (4, -5, 0, 0)),
    (1.439, 2.4099, (3, -5, 0, 0)),
    (1.208, 4.1464, (1, 0, -3, 0)),
    (2.966, 3.6318, (1, 0, 0, -1)),
    (1.563, 4.6829, (0, 0, 0, -1)),
)

# Latitude, cosine terms in (Venus, Earth, Jupiter).
VENUS_LATITUDE = _series(
    (0.122, 4.2726, (0, -1, 0)),
    (0.300, 0.0218, (4, -5, 0)),
    (0.159, 1.3491, (1, 0, -2)),
)

# Log radius, cosine terms in (Venus, Earth, Mars, Jupiter).
VENUS_RADIUS = _series(
    (2.246e-6, 0.5080, (1, -1, 0, 0)),
    (9.772e-6, 1.0159, (2, -2, 0, 0)),
    (8.271e-6, 4.6674, (3, -3, 0, 0)),
    (0.737e-6, 0.8267, (2, -3, 0, 0)),
    (1.426e-6, 5.1747, (4, -4, 0, 0)),
    (0.510e-6, 5.7009, (5, -5, 0, 0)),
    (1.572e-6, 1.8188, (4, -5, 0, 0)),
    (0.717e-6, 2.2969, (2, 0, -3, 0)),
    (2.991e-6, 2.0611, (1, 0, 0, -1)),
    (1.335e-6, 0.9628, (2, 0, 0, -2)),
)

# ───────────────────────────── Nutation ─────────────────────────────

# Long-period nutation in longitude, sine terms in (Ω, F, D, l').
NUTATION_LONGITUDE = _series(
    (0.2088, 0, (2, 0, 0, 0)),
    (-1.2730, 0, (2, 2, -2, 0)),
    (0.1258, 0, (0, 0, 0, 1)),
    (-0.0496, 0, (2, 2, -2, 1)),
    (0.0214, 0, (2, 2, -2, -1)),
    (0.0124, 0, (1, 2, -2, 0)),
)

# Long-period nutation in obliquity, cosine terms in (Ω, F, D, l').
NUTATION_OBLIQUITY = _series(
    (9.2109, 0, (1, 0, 0, 0)),
    (-0.0904, 0, (2, 0, 0, 0)),
    (0.5519, 0, (2, 2, -2, 0)),
    (0.0215, 0, (2, 2, -2, 1)),
    (-0.0093, 0, (2, 2, -2, -1)),
    (-0.0066, 0, (1, 2, -2, 0)),
)

# Short-period nutation in longitude, sine terms in (Ω, F, l, D).
NUTATION_LONGITUDE_SHORT = _series(
    (-0.2037, 0, (2, 2, 0, 0)),
    (0.0675, 0, (0, 0, 1, 0)),
    (-0.0342, 0, (1, 2, 0, 0)),
    (-0.0261, 0, (2, 2, 1, 0)),
    (-0.0149, 0, (0, 0, 1, -2)),
    (0.0114, 0, (2, 2, -1, 0)),
    (0.0060, 0, (0, 0, 0, 2)),
    (0.0058, 0, (1, 0, 1, 0)),
    (-0.0057, 0, (1, 0, -1, 0)),
    (-0.0052, 0, (2, 2, -1, 2)),
)

# Short-period nutation in obliquity, cosine terms in (Ω, F, l).
NUTATION_OBLIQUITY_SHORT = _series(
    (0.0884, 0, (2, 2, 0)),
    (0.0183, 0, (1, 2, 0)),
    (0.0113, 0, (2, 2, 1)),
    (-0.0050, 0, (2, 2, -1)),
)

# ───────────────────────────── Moon ─────────────────────────────

# Solar terms in longitude (sine).
MOON_LONGITUDE = _lunar(
    (0.127, (0, 0, 0, 6)),
    (13.902, (0, 0, 0, 4)),
    (2369.912, (0, 0, 0, 2)),
    (1.979, (1, 0, 0, 4)),
    (191.953, (1, 0, 0, 2)),
    (22639.500, (1, 0, 0, 0)),
    (-4586.465, (1, 0, 0, -2)),
    (-38.428, (1, 0, 0, -4)),
    (-0.393, (1, 0, 0, -6)),
    (-0.289, (0, 1, 0, 4)),
    (-24.420, (0, 1, 0, 2)),
    (-668.146, (0, 1, 0, 0)),
    (-165.145, (0, 1, 0, -2)),
    (-1.877, (0, 1, 0, -4)),
    (0.403, (0, 0, 0, 3)),
    (-125.154, (0, 0, 0, 1)),
    (0.213, (2, 0, 0, 4)),
    (14.387, (2, 0, 0, 2)),
    (769.016, (2, 0, 0, 0)),
    (-211.656, (2, 0, 0, -2)),
    (-30.773, (2, 0, 0, -4)),
    (-0.570, (2, 0, 0, -6)),
    (-2.921, (1, 1, 0, 2)),
    (-109.673, (1, 1, 0, 0)),
    (-205.962, (1, 1, 0, -2)),
    (-4.391, (1, 1, 0, -4)),
    (-0.072, (1, 1, 0, -6)),
    (0.283, (1, -1, 0, 4)),
    (14.577, (1, -1, 0, 2)),
    (147.687, (1, -1, 0, 0)),
    (28.475, (1, -1, 0, -2)),
    (0.636, (1, -1, 0, -4)),
    (-0.189, (0, 2, 0, 2)),
    (-7.486, (0, 2, 0, 0)),
    (-8.096, (0, 2, 0, -2)),
    (-0.151, (0, 2, 0, -4)),
    (-0.085, (0, 0, 2, 4)),
    (-5.741, (0, 0, 2, 2)),
    (-411.608, (0, 0, 2, 0)),
    (-55.173, (0, 0, 2, -2)),
    (-8.466, (1, 0, 0, 1)),
    (18.609, (1, 0, 0, -1)),
    (3.215, (1, 0, 0, -3)),
    (0.150, (0, 1, 0, 3)),
    (18.023, (0, 1, 0, 1)),
    (0.560, (0, 1, 0, -1)),
    (1.060, (3, 0, 0, 2)),
    (36.124, (3, 0, 0, 0)),
    (-13.193, (3, 0, 0, -2)),
    (-1.187, (3, 0, 0, -4)),
    (-0.293, (3, 0, 0, -6)),
    (-0.290, (2, 1, 0, 2)),
    (-7.649, (2, 1, 0, 0)),
    (-8.627, (2, 1, 0, -2)),
    (-2.740, (2, 1, 0, -4)),
    (-0.091, (2, 1, 0, -6)),
    (1.181, (2, -1, 0, 2)),
    (9.703, (2, -1, 0, 0)),
    (-2.494, (2, -1, 0, -2)),
    (0.360, (2, -1, 0, -4)),
    (-1.167, (1, 2, 0, 0)),
    (-7.412, (1, 2, 0, -2)),
    (-0.311, (1, 2, 0, -4)),
    (0.757, (1, -2, 0, 2)),
    (2.580, (1, -2, 0, 0)),
    (2.533, (1, -2, 0, -2)),
    (-0.103, (0, 3, 0, 0)),
    (-0.344, (0, 3, 0, -2)),
    (-0.992, (1, 0, 2, 2)),
    (-45.099, (1, 0, 2, 0)),
    (-0.179, (1, 0, 2, -2)),
    (-0.301, (1, 0, 2, -4)),
    (-6.382, (1, 0, -2, 2)),
    (39.528, (1, 0, -2, 0)),
    (9.366, (1, 0, -2, -2)),
    (0.202, (1, 0, -2, -4)),
    (0.415, (0, 1, 2, 0)),
    (-2.152, (0, 1, 2, -2)),
    (-1.440, (0, 1, -2, 2)),
    (0.076, (0, 1, -2, 0)),
    (0.384, (0, 1, -2, -2)),
    (-0.586, (2, 0, 0, 1)),
    (1.750, (2, 0, 0, -1)),
    (1.225, (2, 0, 0, -3)),
    (1.267, (1, 1, 0, 1)),
    (0.137, (1, 1, 0, -1)),
    (0.233, (1, 1, 0, -3)),
    (-0.122, (1, -1, 0, 1)),
    (-1.089, (1, -1, 0, -1)),
    (-0.276, (1, -1, 0, -3)),
    (0.255, (0, 0, 2, 1)),
    (0.584, (0, 0, 2, -1)),
    (0.254, (0, 0, 2, -3)),
    (0.070, (4, 0, 0, 2)),
    (1.938, (4, 0, 0, 0)),
    (-0.952, (4, 0, 0, -2)),
    (-0.551, (3, 1, 0, 0)),
    (-0.482, (3, 1, 0, -2)),
    (-0.100, (3, 1, 0, -4)),
    (0.088, (3, -1, 0, 2)),
    (0.681, (3, -1, 0, 0)),
    (-0.183, (3, -1, 0, -2)),
    (-0.297, (2, 2, 0, -2)),
    (-0.161, (2, 2, 0, -4)),
    (0.197, (2, -2, 0, 0)),
    (0.254, (2, -2, 0, -2)),
    (-0.250, (1, 3, 0, -2)),
    (-0.123, (2, 0, 2, 2)),
    (-3.996, (2, 0, 2, 0)),
    (0.557, (2, 0, 2, -2)),
    (-0.459, (2, 0, -2, 2)),
    (-1.370, (2, 0, -2, 0)),
    (0.538, (2, 0, -2, -2)),
    (0.173, (2, 0, -2, -4)),
    (0.263, (1, 1, 2, 0)),
    (0.083, (1, 1, -2, 2)),
    (-0.083, (1, 1, -2, 0)),
    (0.426, (1, 1, -2, -2)),
    (-0.304, (1, -1, 2, 0)),
    (-0.372, (1, -1, -2, 2)),
    (0.083, (1, -1, -2, 0)),
    (0.418, (0, 0, 4, 0)),
    (0.074, (0, 0, 4, -2)),
    (0.130, (3, 0, 0, -1)),
    (0.092, (2, 1, 0, 1)),
    (0.084, (2, 1, 0, -3)),
    (-0.352, (2, -1, 0, -1)),
    (0.113, (5, 0, 0, 0)),
    (-0.330, (3, 0, 2, 0)),
    (0.090, (1, 0, 4, 0)),
    (-0.080, (1, 0, -4, 0)),
)

# Solar terms in the argument of latitude (sine).
MOON_LATITUDE_ARGUMENT = _lunar(
    (-112.79, (0, 0, 0, 1)),
    (2373.36, (0, 0, 0, 2)),
    (-4.01, (0, 0, 0, 3)),
    (14.06, (0, 0, 0, 4)),
    (6.98, (1, 0, 0, 4)),
    (192.72, (1, 0, 0, 2)),
    (-13.51, (1, 0, 0, 1)),
    (22609.07, (1, 0, 0, 0)),
    (3.59, (1, 0, 0, -1)),
    (-4578.13, (1, 0, 0, -2)),
    (5.44, (1, 0, 0, -3)),
    (-38.64, (1, 0, 0, -4)),
    (14.78, (2, 0, 0, 2)),
    (767.96, (2, 0, 0, 0)),
    (2.01, (2, 0, 0, -1)),
    (-152.53, (2, 0, 0, -2)),
    (-34.07, (2, 0, 0, -4)),
    (2.96, (3, 0, 0, 2)),
    (50.64, (3, 0, 0, 0)),
    (-16.40, (3, 0, 0, -2)),
    (3.60, (4, 0, 0, 0)),
    (-1.58, (4, 0, 0, -2)),
    (-1.59, (0, 1, 0, 4)),
    (-25.10, (0, 1, 0, 2)),
    (17.93, (0, 1, 0, 1)),
    (-126.98, (0, 1, 0, 0)),
    (-165.06, (0, 1, 0, -2)),
    (-6.46, (0, 1, 0, -4)),
    (-1.68, (0, 2, 0, 2)),
    (-16.35, (0, 2, 0, -2)),
    (-11.75, (1, 1, 0, 2)),
    (1.52, (1, 1, 0, 1)),
    (-115.18, (1, 1, 0, 0)),
    (-182.36, (1, 1, 0, -2)),
    (-9.66, (1, 1, 0, -4)),
    (-2.27, (-1, 1, 0, 4)),
    (-23.59, (-1, 1, 0, 2)),
    (-138.76, (-1, 1, 0, 0)),
    (-31.70, (-1, 1, 0, -2)),
    (-1.53, (-1, 1, 0, -4)),
    (-10.56, (2, 1, 0, 0)),
    (-7.59, (2, 1, 0, -2)),
    (-2.54, (2, 1, 0, -4)),
    (3.32, (2, -1, 0, 2)),
    (11.67, (2, -1, 0, 0)),
    (-6.12, (1, 2, 0, -2)),
    (-2.40, (-1, 2, 0, 2)),
    (-2.32, (-1, 2, 0, 0)),
    (-1.82, (-1, 2, 0, -2)),
    (-52.14, (0, 0, 2, -2)),
    (-1.67, (0, 0, 2, -4)),
    (-9.52, (1, 0, 2, -2)),
    (-85.13, (-1, 0, 2, 0)),
    (3.37, (-1, 0, 2, -2)),
    (-2.26, (0, 1, 2, -2)),
)

# Solar terms scaling the latitude inclination factor (cosine).
MOON_LATITUDE_FACTOR = _lunar(
    (-0.725, (0, 0, 0, 1)),
    (0.601, (0, 0, 0, 2)),
    (0.394, (0, 0, 0, 3)),
    (-0.445, (1, 0, 0, 4)),
    (0.455, (1, 0, 0, 1)),
    (0.192, (1, 0, 0, -3)),
    (5.679, (2, 0, 0, -2)),
    (-0.308, (2, 0, 0, -4)),
    (-0.166, (3, 0, 0, 2)),
    (-1.300, (3, 0, 0, 0)),
    (0.258, (3, 0, 0, -2)),
    (-1.302, (0, 1, 0, 0)),
    (-0.416, (0, 1, 0, -4)),
    (-0.740, (0, 2, 0, -2)),
    (0.787, (1, 1, 0, 2)),
    (0.461, (1, 1, 0, 0)),
    (2.056, (1, 1, 0, -2)),
    (-0.471, (1, 1, 0, -4)),
    (-0.443, (-1, 1, 0, 2)),
    (0.679, (-1, 1, 0, 0)),
    (-1.540, (-1, 1, 0, -2)),
    (0.259, (2, 1, 0, 0)),
    (-0.212, (2, -1, 0, 2)),
    (-0.151, (2, -1, 0, 0)),
)

# Solar terms in latitude (sine).
MOON_LATITUDE_NODE = _lunar(
    (-526.069, (0, 0, 1, -2)),
    (-3.352, (0, 0, 1, -4)),
    (44.297, (1, 0, 1, -2)),
    (-6.000, (1, 0, 1, -4)),
    (20.599, (-1, 0, 1, 0)),
    (-30.598, (-1, 0, 1, -2)),
    (-24.649, (-2, 0, 1, 0)),
    (-2.000, (-2, 0, 1, -2)),
    (-22.571, (0, 1, 1, -2)),
    (10.985, (0, -1, 1, -2)),
)

# Solar terms in parallax (cosine), added to 3422.700".
MOON_PARALLAX = _lunar(
    (0.2607, (0, 0, 0, 4)),
    (28.2333, (0, 0, 0, 2)),
    (0.0433, (1, 0, 0, 4)),
    (3.0861, (1, 0, 0, 2)),
    (186.5398, (1, 0, 0, 0)),
    (34.3117, (1, 0, 0, -2)),
    (0.6008, (1, 0, 0, -4)),
    (-0.3000, (0, 1, 0, 2)),
    (-0.3997, (0, 1, 0, 0)),
    (1.9178, (0, 1, 0, -2)),
    (0.0339, (0, 1, 0, -4)),
    (-0.9781, (0, 0, 0, 1)),
    (0.2833, (2, 0, 0, 2)),
    (10.1657, (2, 0, 0, 0)),
    (-0.3039, (2, 0, 0, -2)),
    (0.3722, (2, 0, 0, -4)),
    (0.0109, (2, 0, 0, -6)),
    (-0.0484, (1, 1, 0, 2)),
    (-0.9490, (1, 1, 0, 0)),
    (1.4437, (1, 1, 0, -2)),
    (0.0673, (1, 1, 0, -4)),
    (0.2302, (1, -1, 0, 2)),
    (1.1528, (1, -1, 0, 0)),
    (-0.2257, (1, -1, 0, -2)),
    (-0.0102, (1, -1, 0, -4)),
    (0.0918, (0, 2, 0, -2)),
    (-0.0124, (0, 0, 2, 0)),
    (-0.1052, (0, 0, 2, -2)),
    (-0.1093, (1, 0, 0, 1)),
    (0.0118, (1, 0, 0, -1)),
    (-0.0386, (1, 0, 0, -3)),
    (0.1494, (0, 1, 0, 1)),
    (0.0243, (3, 0, 0, 2)),
    (0.6215, (3, 0, 0, 0)),
    (-0.1187, (3, 0, 0, -2)),
    (-0.1038, (2, 1, 0, 0)),
    (-0.0192, (2, 1, 0, -2)),
    (0.0324, (2, 1, 0, -4)),
    (0.0213, (2, -1, 0, 2)),
    (0.1268, (2, -1, 0, 0)),
    (-0.0106, (1, 2, 0, 0)),
    (0.0484, (1, 2, 0, -2)),
    (0.0112, (1, -2, 0, 2)),
    (0.0196, (1, -2, 0, 0)),
    (-0.0212, (1, -2, 0, -2)),
    (-0.0833, (1, 0, 2, -2)),
    (-0.0481, (1, 0, -2, 2)),
    (-0.7136, (1, 0, -2, 0)),
    (-0.0112, (1, 0, -2, -2)),
    (-0.0100, (2, 0, 0, 1)),
    (0.0155, (2, 0, 0, -1)),
    (0.0164, (1, 1, 0, 1)),
    (0.0401, (4, 0, 0, 0)),
    (-0.0130, (4, 0, 0, -2)),
    (0.0115, (3, -1, 0, 0)),
    (-0.0141, (2, 0, -2, -2)),
)

# Planetary terms in longitude; multipliers of (Earth, Venus, Jupiter, Mars, node).
MOON_LONGITUDE_PLANETARY = tuple(PlanetaryLunarTerm(*row) for row in (
    (0.822, (0, 0, 0, 0), (1, -1, 0, 0, 0), 0.0),
    (0.307, (0, 0, 0, 0), (2, -2, 0, 0, 0), 179.8),
    (0.348, (0, 0, 0, 0), (3, -2, 0, 0, 0), 272.9),
    (0.176, (0, 0, 0, 0), (4, -3, 0, 0, 0), 271.7),
    (0.092, (0, 0, 0, 0), (5, -3, 0, 0, 0), 199.0),
    (0.129, (1, 0, 0, 0), (-1, 1, 0, 0, 0), 180.0),
    (0.152, (1, 0, 0, 0), (1, -1, 0, 0, 0), 0.0),
    (0.127, (1, 0, 0, 0), (3, -3, 0, 0, 0), 180.0),
    (0.099, (0, 0, 0, 2), (1, -1, 0, 0, 0), 0.0),
    (0.136, (0, 0, 0, 2), (2, -2, 0, 0, 0), 179.5),
    (0.083, (-1, 0, 0, 2), (-4, 4, 0, 0, 0), 180.0),
    (0.662, (-1, 0, 0, 2), (-3, 3, 0, 0, 0), 180.0),
    (0.137, (-1, 0, 0, 2), (-2, 2, 0, 0, 0), 0.0),
    (0.133, (-1, 0, 0, 2), (1, -1, 0, 0, 0), 0.0),
    (0.157, (-1, 0, 0, 2), (2, -2, 0, 0, 0), 179.6),
    (0.079, (-1, 0, 0, 2), (-8, 6, 0, 0, 0), 162.6),
    (0.073, (2, 0, 0, -2), (3, -3, 0, 0, 0), 180.0),
    (0.643, (0, 0, 0, 0), (-1, 0, 1, 0, 0), 178.8),
    (0.187, (0, 0, 0, 0), (-2, 0, 2, 0, 0), 359.6),
    (0.087, (0, 0, 0, 0), (0, 0, 1, 0, 0), 289.9),
    (0.165, (0, 0, 0, 0), (-1, 0, 2, 0, 0), 241.5),
    (0.144, (1, 0, 0, 0), (1, 0, -1, 0, 0), 1.0),
    (0.158, (1, 0, 0, 0), (-1, 0, 1, 0, 0), 179.0),
    (0.190, (1, 0, 0, 0), (-2, 0, 2, 0, 0), 180.0),
    (0.096, (1, 0, 0, 0), (-2, 0, 3, 0, 0), 352.5),
    (0.070, (0, 0, 0, 2), (2, 0, -2, 0, 0), 180.0),
    (0.167, (0, 0, 0, 2), (-1, 0, 1, 0, 0), 178.5),
    (0.085, (0, 0, 0, 2), (-2, 0, 2, 0, 0), 359.2),
    (1.137, (-1, 0, 0, 2), (2, 0, -2, 0, 0), 180.3),
    (0.211, (-1, 0, 0, 2), (-1, 0, 1, 0, 0), 178.4),
    (0.089, (-1, 0, 0, 2), (-2, 0, 2, 0, 0), 359.2),
    (0.436, (-1, 0, 0, 2), (2, 0, -3, 0, 0), 7.5),
    (0.240, (2, 0, 0, -2), (-2, 0, 2, 0, 0), 179.9),
    (0.284, (2, 0, 0, -2), (-2, 0, 3, 0, 0), 172.5),
    (0.195, (0, 0, 0, 0), (-2, 0, 0, 2, 0), 180.2),
    (0.327, (0, 0, 0, 0), (-1, 0, 0, 2, 0), 224.4),
    (0.093, (0, 0, 0, 0), (-2, 0, 0, 4, 0), 244.8),
    (0.073, (1, 0, 0, 0), (-1, 0, 0, 2, 0), 223.3),
    (0.074, (1, 0, 0, 0), (1, 0, 0, -2, 0), 306.3),
    (0.189, (0, 0, 0, 0), (0, 0, 0, 0, 1), 180.0),
))

# ───────────────────────────── Outer planet elements ─────────────────────────────

URANUS_ELEMENTS = OrbitalElementTable(
    36525.0, 19.19126393, 0.04716771, 0.76986, 74.22988, 170.96424, 313.23218,
    0.00152025, -0.00019150, -2.09, -1681.40, 1312.56, 1542547.79,
)

NEPTUNE_ELEMENTS = OrbitalElementTable(
    36525.0, 30.06896348, 0.00858587, 1.76917, 131.72169, 44.97135, 304.88003,
    -0.00125196, 0.0000251, -3.64, -151.25, -844.43, 786449.21,
)

PLUTO_ELEMENTS = OrbitalElementTable(
    36525.0, 39.48168677, 0.24880766, 17.14175, 110.30347, 224.06676, 238.92881,
    -0.00076912, 0.00006465, 11.07, -37.33, -132.25, 522747.90,
)
