"""
Fixed service constants. There is no runtime configuration surface.
"""

from datetime import timedelta

# Remote TLE provider for the ISS (NORAD 25544)
NORAD_ID = 25544
TLE_PROVIDER_URL = f"https://tle.ivanstanojevic.me/api/tle/{NORAD_ID}"

# Used whenever the provider cannot be reached or returns garbage
FALLBACK_LINE1 = "1 25544C 98067A   22200.25763889 -.00062278  00000-0 -10890-2 0   600"
FALLBACK_LINE2 = "2 25544  51.6399 177.7528 0005075  27.4260 127.4524 15.49998601    18"

# Element set is refreshed once it is older than this
ELEMENTS_MAX_AGE = timedelta(seconds=3600)

# Path snapshot is recomputed once it is this old
PATH_MAX_AGE = timedelta(seconds=30)
PATH_WINDOW = timedelta(minutes=92)
PATH_STEP = timedelta(seconds=60)

# (requests, window) per route
POSITION_RATE_LIMIT = (10, timedelta(seconds=60))
PATH_RATE_LIMIT = (5, timedelta(seconds=60))

HOST = "0.0.0.0"
PORT = 3000
