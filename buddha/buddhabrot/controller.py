from enum import Enum, auto
from typing import Optional

import numpy as np

from buddha.buddhabrot.opencl.buddhabrot_cl import BuddhabrotCL, PY_OPEN_CL_INSTALLED
from buddha.buddhabrot.sampling import CpuAccumulator, render_pass
from buddha.utils.buddhabrot_utils import BuddhabrotConfig, my_logger


class RenderState(Enum):
    STALE = auto()
    FRESH = auto()


class BuddhabrotController:
    def __init__(self, config: BuddhabrotConfig, rng: Optional[np.random.Generator] = None):
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng(config.seed)
        self.state = RenderState.STALE
        self.image: Optional[np.ndarray] = None
        self._cl: Optional[BuddhabrotCL] = None

    def get_cl(self):
        if self._cl is None:
            self._cl = BuddhabrotCL()
        return self._cl

    def set_config(self, config: BuddhabrotConfig):
        config.validate()
        # a new configuration starts the generator over so the pass matches its CLI arguments
        self.rng = np.random.default_rng(config.seed)
        self.config = config
        self.invalidate()

    def invalidate(self):
        self.state = RenderState.STALE

    def _get_accumulator(self):
        if self.config.gpu:
            if PY_OPEN_CL_INSTALLED:
                return self.get_cl().start(self.config)
            my_logger.warning("gpu requested but PyOpenCL is unavailable, using the cpu")
        return CpuAccumulator(self.config)

    def compute(self) -> np.ndarray:
        self.image = render_pass(self.config, self.rng, self._get_accumulator())
        self.state = RenderState.FRESH
        return self.image

    def get_image(self) -> np.ndarray:
        if self.state is RenderState.STALE:
            return self.compute()
        return self.image
