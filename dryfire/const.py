# -----------------------------
# Detection defaults (tweak via a YAML profile)
# -----------------------------

# Red laser: r must exceed r, g and b must stay below g and b
RED_THRESHOLD = (150, 70, 70)
# Green laser: g must exceed g, r and b must stay below r and b
GREEN_THRESHOLD = (70, 150, 70)

MIN_BRIGHTNESS = 100        # minimum r+g+b; dimmer pixels never match
MIN_COLOR_DOMINANCE = 30    # dominant channel must beat both others by this much

# Flood fill stays within this many pixels of its seed (exclusive)
CLUSTER_RADIUS = 10
# Clusters smaller than this are noise
MIN_LASER_SIZE = 2

# Summed |dr|+|dg|+|db| a pixel must differ from the background snapshot by
BACKGROUND_THRESHOLD = 100
