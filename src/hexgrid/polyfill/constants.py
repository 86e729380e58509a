# Grid resolutions accepted by the grid index
MIN_RESOLUTION = 0
MAX_RESOLUTION = 15

# Largest distance (radians) from a cell centroid to one of its vertices at
# each resolution. Pentagons are the worst case, so these are pentagon radii.
MAX_VERTEX_RADII = (
    0.1627467775419132,
    0.05531000215848966,
    0.021576562318774757,
    0.007640139412730925,
    0.0030479908472205923,
    0.0010861879312414082,
    0.0004347266499694732,
    0.0001550625768904632,
    6.208951215426715e-05,
    2.214961110272488e-05,
    8.869638583639624e-06,
    3.1641855561633976e-06,
    1.2670852730677077e-06,
    4.5202559844899493e-07,
    1.8101206095593024e-07,
    6.457506774604356e-08,
)

# Samples taken per maximum vertex radius along a boundary
SAMPLES_PER_VERTEX_RADIUS = 3

# Default configuration values
DEFAULT_RESOLUTION = 9
DEFAULT_GEODESIC = True
DEFAULT_WRITE_BOUNDARIES = False
DEFAULT_CHECK_CONTAINMENT = False
DEFAULT_NUMBER = -1
DEFAULT_OUTPUT_FILE = "cells.csv"

# Configuration sections
SOURCE_SECTION_NAME = "Source"
GRID_SECTION_NAME = "Grid"
DESTINATION_SECTION_NAME = "Destination"
SETTINGS_SECTION_NAME = "Settings"
