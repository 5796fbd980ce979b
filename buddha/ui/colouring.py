import numpy as np
from PIL import Image


def greyscale_colouring(intensity: np.ndarray):
    # the same grey level drives every channel
    return np.repeat(intensity[:, :, np.newaxis], 3, axis=2).astype(np.uint8)


def to_image(intensity: np.ndarray):
    return Image.fromarray(greyscale_colouring(intensity), "RGB")
