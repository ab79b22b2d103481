"""Ecosystem and population management configuration constants."""

INITIAL_POPULATION = 15  # Fish seeded at start and on reset
MIN_POPULATION = 5  # Below this the controller restocks
RESPAWN_BATCH = 3  # Fish added per restock and per "add fish" command
MAX_ECOSYSTEM_EVENTS = 1000  # Maximum events kept in the ecosystem history
