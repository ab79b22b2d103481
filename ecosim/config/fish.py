"""Fish-specific configuration constants."""

# Size bounds (multiplier of the species base size)
MIN_SIZE = 0.3
MAX_SIZE = 4.0

# Randomly seeded fish start in [INITIAL_SIZE_MIN, INITIAL_SIZE_MIN + INITIAL_SIZE_SPREAD)
INITIAL_SIZE_MIN = 1.0
INITIAL_SIZE_SPREAD = 0.5
INITIAL_HUNGER_MAX = 0.5
INITIAL_VELOCITY_SPREAD = 2.0

# Feeding and growth
EAT_DISTANCE = 20.0  # Eat radius per unit of size
GROWTH_RATE = 0.15  # Size gained per unit of nutrition
PREDATION_GROWTH_FACTOR = 0.3  # Predator gains this fraction of the victim's size

# Metabolism (times in seconds, rates per millisecond)
HUNGER_THRESHOLD = 8.0  # Unfed seconds before a fish is starving
STARVE_THRESHOLD = 30.0  # Unfed seconds before starvation damages the fish
BASE_METABOLISM = 0.0003  # Size lost per ms while starving past STARVE_THRESHOLD
HUNGER_RATE = 0.001  # Hunger accrued per ms while starving
HEALTH_DECAY_RATE = 0.002  # Health lost per ms past STARVE_THRESHOLD
DEATH_HEALTH_THRESHOLD = 0.1  # Fish at or below this health die
CORPSE_MIN_SIZE = 0.5  # Starved fish larger than this leave food behind

# Reproduction
REPRODUCTION_SIZE = 1.8
REPRODUCTION_CHANCE = 0.015  # Roll after each meal
NATURAL_REPRODUCTION_CHANCE = 0.001  # Roll once per tick for eligible fish
REPRODUCTION_COOLDOWN_MS = 10000.0
OFFSPRING_COUNT = 2
OFFSPRING_SIZE = 0.8
OFFSPRING_DISTANCE = 40.0
