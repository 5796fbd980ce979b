import numpy as np


def normalize(histogram: np.ndarray) -> np.ndarray:
    """Scale visit counts to grey levels, with the busiest pixel at 255."""
    max_count = histogram.max() if histogram.size else 0
    if max_count == 0:
        return np.zeros(histogram.shape, dtype=np.uint8)

    return (255 * histogram.astype(np.int64) // max_count).astype(np.uint8)
