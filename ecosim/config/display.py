"""Display and frame timing configuration constants."""

# Default viewport dimensions in pixels (replaced by the presentation layer)
VIEWPORT_WIDTH = 1280
VIEWPORT_HEIGHT = 720

# The reference frame rate; per-frame forces are scaled by elapsed/frame time
FRAME_RATE = 60

# Longest frame delta honoured after a stall or pause (milliseconds)
MAX_FRAME_DELTA_MS = 100.0

# Fish below this health render with the low-health marker
LOW_HEALTH_DISPLAY_THRESHOLD = 0.3

# Width of the "=" banners in headless log output
SEPARATOR_WIDTH = 60
