# Configuration and constants for word search generation

DEFAULT_GRID_SIZE = 15
MAX_PLACEMENT_ATTEMPTS = 500
MAX_GRID_SIZE = 50

# Word constraints applied to LLM output before packing
MIN_WORD_LENGTH = 3
MAX_WORD_LENGTH = 8
MAX_TOPIC_WORDS = 12
MIN_TOPIC_LENGTH = 3

# Shortest selection the client can submit as a word
MIN_SELECTION_LENGTH = 3

FALLBACK_TOPICS = [
    "ANIMALS", "OCEAN", "SPACE", "FOREST", "MOUNTAINS", "DESERT", "RIVERS", "LAKES",
    "BIRDS", "FISH", "INSECTS", "PLANTS", "TREES", "FLOWERS", "FRUITS", "VEGETABLES",
    "SPORTS", "MUSIC", "ART", "SCIENCE", "HISTORY", "GEOGRAPHY", "WEATHER", "SEASONS",
]
LAST_RESORT_TOPIC = "ANIMALS"
