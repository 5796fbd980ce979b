from pathlib import Path

import numpy as np

from buddha.utils.buddhabrot_utils import BuddhabrotConfig, my_logger
from buddha.utils.constants import BREAKOUT_R2

PY_OPEN_CL_INSTALLED = False
cl = None
try:
    import pyopencl as cl

    PY_OPEN_CL_INSTALLED = True
except ModuleNotFoundError:
    my_logger.warning("No PyOpenCL installation found.")


class BuddhabrotCL:
    """
    Accumulates Buddhabrot orbits on an OpenCL device, one work item per
    candidate, incrementing a shared histogram with atomics.
    """

    def __init__(self):
        platform = cl.get_platforms()[0]
        my_logger.debug(platform.get_devices())

        self.mf = cl.mem_flags
        self.ctx = cl.create_some_context(interactive=False)
        self.queue = cl.CommandQueue(self.ctx)
        self.prg = None
        self.config = None
        self.hbuf = None
        self.grid = None
        self.total = None
        self.compile()

    def get_program_contents(self):
        with open(Path(__file__).parent / "buddhabrot.cl") as f:
            return f.read()

    def compile(self):
        my_logger.debug("compiling...")
        self.prg = cl.Program(self.ctx, self.get_program_contents()).build()
        my_logger.debug("done")

    def start(self, config: BuddhabrotConfig):
        self.config = config
        size = config.image_size
        if self.grid is None or self.grid.shape != (size, size):
            self.release()
            self.grid = np.zeros((size, size), dtype=np.uint32, order="C")
            self.hbuf = cl.Buffer(self.ctx, self.mf.READ_WRITE, self.grid.nbytes)
        self.total = np.zeros((size, size), dtype=np.int64)
        self._clear_device_grid()
        return self

    def _clear_device_grid(self):
        cl.enqueue_fill_buffer(self.queue, self.hbuf, np.uint32(0), 0, self.grid.nbytes)

    def add(self, candidates: np.ndarray):
        reals = np.ascontiguousarray(candidates.real, dtype=np.float64)
        imags = np.ascontiguousarray(candidates.imag, dtype=np.float64)
        stats = np.zeros(3, dtype=np.uint32)
        if reals.size == 0:
            return stats.reshape(1, 3).astype(np.int64)

        rbuf = cl.Buffer(self.ctx, self.mf.READ_ONLY | self.mf.COPY_HOST_PTR, hostbuf=reals)
        ibuf = cl.Buffer(self.ctx, self.mf.READ_ONLY | self.mf.COPY_HOST_PTR, hostbuf=imags)
        sbuf = cl.Buffer(self.ctx, self.mf.READ_WRITE | self.mf.COPY_HOST_PTR, hostbuf=stats)

        min_r, max_r, min_i, max_i = self.config.region.bounds()
        self.prg.buddhabrot(
            self.queue,
            reals.shape,
            None,
            rbuf,
            ibuf,
            self.hbuf,
            sbuf,
            np.int32(self.config.max_iterations),
            np.int32(self.config.image_size),
            np.float64(min_r),
            np.float64(max_r),
            np.float64(min_i),
            np.float64(max_i),
            np.float64(BREAKOUT_R2),
        )
        cl.enqueue_copy(self.queue, stats, sbuf)
        # the device counters are 32 bit, so each chunk is folded into the int64 total
        cl.enqueue_copy(self.queue, self.grid, self.hbuf)
        self.queue.finish()
        self.total += self.grid
        self._clear_device_grid()
        for buf in (rbuf, ibuf, sbuf):
            buf.release()
        return stats.reshape(1, 3).astype(np.int64)

    def histogram(self):
        return self.total.copy()

    def release(self):
        if getattr(self, "hbuf", None) is not None:
            self.hbuf.release()
            self.hbuf = None

    def __del__(self):
        self.release()
