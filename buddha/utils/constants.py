BREAKOUT_R2 = 2.0

CARDIOID_OFFSET = 0.25
BULB_R2 = 1 / 16

DEFAULT_IMAGE_SIZE = 1000
DEFAULT_MIN = complex(-2.0, -1.5)
DEFAULT_MAX = complex(1.0, 1.5)
DEFAULT_SAMPLES_PER_PIXEL = 30
DEFAULT_MAX_ITERATIONS = 100

# candidates drawn from the generator per kernel launch
CHUNK_SIZE = 2 ** 20

# memory allowed for the per-worker partial histograms of one pass
MAX_PARTIALS_BYTES = 2 ** 30
