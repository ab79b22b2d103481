"""Flocking (boids) force model configuration constants."""

MAX_SPEED = 2.0  # Pixels per reference frame for a size 1.0 fish
MAX_FORCE = 0.04  # Steering clamp for separation/alignment/cohesion
VISUAL_RANGE = 100.0  # Neighbour radius for alignment and cohesion

# Separation only reacts to fish inside this fraction of the visual range
SEPARATION_RANGE_FACTOR = 0.4

SEPARATION_WEIGHT = 1.5
ALIGNMENT_WEIGHT = 1.0
COHESION_WEIGHT = 1.0
FOOD_ATTRACTION_WEIGHT = 2.0

# Food seeking
FOOD_SEEK_RANGE = 300.0  # Starving fish ignore food farther than this
FOOD_ARRIVAL_DISTANCE = 100.0  # Desired speed ramps down inside this distance
FOOD_FORCE_MULTIPLIER = 2.0  # Food steering may be this many times MAX_FORCE

# Boundary avoidance
EDGE_MARGIN = 50.0
EDGE_TURN_FACTOR = 0.5
