"""
Physical constants and solver bounds for the projectile engine.

All quantities in SI units (m, s, m/s, m/s²); angles exposed to the user
are in degrees.
"""

import math

# Standard gravity used for the default Y acceleration [m/s²]
GRAVITY = 9.81

DEG_TO_RAD = math.pi / 180.0
RAD_TO_DEG = 180.0 / math.pi

# Catalogue sweeps per axis before giving up
MAX_ROUNDS = 20

# X/Y alternations per solve (time discovered on one axis feeds the other)
OUTER_PASSES = 3

# Larger quadratic time root must exceed this to be preferred over the smaller one [s]
ROOT_THRESHOLD = 1e-3

# Trajectory sampling for plotting
DEFAULT_SAMPLES = 101
PLOT_MARGIN = 0.1
PLOT_MIN_SPAN = 1.0
