"""Configuration constants for the starfield viewer."""

# Coordinate and sizing parameters
DISTANCE_SCALE = 2.0  # Scene units per catalog distance unit
MAGNITUDE_BASE = 5.0  # radius = MAGNITUDE_BASE - magnitude
MIN_STAR_RADIUS = 0.5  # Floor that keeps faint stars from degenerating
STAR_SPHERE_SEGMENTS = 16  # Rows/cols of the latitude sphere mesh

# Glow shell around each star
GLOW_RADIUS_FACTOR = 1.5
GLOW_ALPHA = 0.3

# Camera parameters
CAMERA_DISTANCE = 500.0  # Initial camera distance on the +z axis
CAMERA_FOV = 60.0  # Vertical field of view in degrees
CAMERA_NEAR = 0.1
CAMERA_FAR = 10000.0
CAMERA_AZIMUTH = 0.0
CAMERA_ELEVATION = 90.0  # Looking down from +z

# Zoom policy
ZOOM_FACTOR = 1.1  # Distance multiplier per discrete zoom step
ZOOM_MIN_DISTANCE = 100.0
ZOOM_MAX_DISTANCE = 1000.0

# Fog (exponential squared, black)
FOG_DENSITY = 0.00025
FOG_DENSITY_MIN = 0.0
FOG_DENSITY_MAX = 0.002
FOG_COLOR = (0.0, 0.0, 0.0)

# Background particle field
BACKGROUND_STAR_COUNT = 5000
BACKGROUND_RADIUS = 2000.0
BACKGROUND_JITTER = 20.0  # Max outward/ambient offset from the shell surface
BACKGROUND_POINT_SIZE = 1.0
BACKGROUND_ALPHA = 0.6
BACKGROUND_COLOR_VARIATION = (0.1, 0.1, 0.2)

# Tap highlight animation
HIGHLIGHT_SCALE = 1.5
HIGHLIGHT_DURATION = 0.2  # Seconds to scale up (and again to settle)
TAP_MOVE_TOLERANCE = 4.0  # Pixels a press may travel and still count as a tap

# Settings defaults and ranges
SHOW_BACKGROUND_STARS = True
CAMERA_ALLOWS_CONTROL = True
STAR_SIZE_SCALE = 1.0
STAR_SIZE_SCALE_MIN = 0.5
STAR_SIZE_SCALE_MAX = 2.0
INFO_PANEL_OPACITY = 0.85
INFO_PANEL_OPACITY_MIN = 0.3
INFO_PANEL_OPACITY_MAX = 1.0

# Info panel layout (pixels)
INFO_PANEL_WIDTH = 300
INFO_PANEL_HEIGHT = 200
INFO_PANEL_PADDING = 12
INFO_PANEL_OFFSET_X = 16

# Catalog
DEFAULT_CATALOG = "stars.json"

# Help text (used in both CLI --help and in-app H key overlay)
HELP_CONTENT = (
    "--- Controls ---\n"
    "Mouse drag: Rotate view\n"
    "Scroll wheel: Zoom in/out\n"
    "Left-click: Select star\n"
    "X: Clear selection\n"
    "B: Toggle background stars\n"
    "C: Toggle camera control\n"
    "+ / -: Star size scale\n"
    "[ / ]: Fog density\n"
    "O: Cycle info panel opacity\n"
    "R: Reset camera\n"
    "Q: Quit\n"
    "H: Toggle this help"
)
