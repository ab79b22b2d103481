"""Food system configuration constants."""

DEFAULT_FOOD_NUTRITION = 1.0
FISH_FOOD_NUTRITION = 4.0  # Kills and starved corpses feed more

FOOD_LIFE_SPAN_MS = 10000.0
FOOD_SPAWN_INTERVAL_MS = 2000.0
FOOD_CAPACITY = 50  # Spawns are refused once the store holds this many items
FOOD_DRIFT_SPREAD = 0.5  # Velocity components drawn from [-spread/2, spread/2)
AUTO_FOOD_ENABLED = True

# Click feeding: a small scatter of food around the pointer
FEED_BURST_COUNT = 3
FEED_BURST_RADIUS = 30.0
# "Add food" button
FOOD_BATCH_COUNT = 10
