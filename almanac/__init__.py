"""
Astronomical Almanac

Ephemerides of the Sun, Moon, planets and a comet for a terrestrial observer,
and a search engine for rises, sets, seasons, meteor showers, lunar phases,
eclipses, transits and occultations over a sampled time window.
"""

__version__ = "1.0.0"
__author__ = "Astro Almanac Team"

# Version information
VERSION_INFO = {
    "major": 1,
    "minor": 0,
    "patch": 0,
    "status": "stable"
}
