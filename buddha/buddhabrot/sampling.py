import time
from dataclasses import dataclass
from typing import Optional

import numba
import numpy as np
from numba import njit, prange

from buddha.buddhabrot.candidate_filter import is_rejected
from buddha.buddhabrot.histogram import accumulate_orbit
from buddha.buddhabrot.normalize import normalize
from buddha.buddhabrot.orbit import trace_orbit_into
from buddha.utils.buddhabrot_utils import BuddhabrotConfig, PlaneRegion, my_logger
from buddha.utils.constants import CHUNK_SIZE, MAX_PARTIALS_BYTES

REJECTED, ESCAPED, ACCUMULATED = range(3)


@dataclass()
class SamplingStats:
    samples: int = 0
    rejected: int = 0
    escaped: int = 0
    accumulated: int = 0

    def add(self, worker_stats: np.ndarray, samples: int):
        totals = worker_stats.sum(axis=0)
        self.samples += samples
        self.rejected += int(totals[REJECTED])
        self.escaped += int(totals[ESCAPED])
        self.accumulated += int(totals[ACCUMULATED])


def get_num_workers(config: BuddhabrotConfig):
    requested = config.num_workers or numba.get_num_threads()
    # every worker owns a full size x size int64 histogram
    limit = max(1, MAX_PARTIALS_BYTES // (8 * config.image_size * config.image_size))
    if requested > limit:
        my_logger.warning(f"using {limit} workers instead of {requested} to bound histogram memory")
    return min(requested, limit)


def make_partials(num_workers: int, size: int):
    return np.zeros((num_workers, size, size), dtype=np.int64)


def draw_candidates(rng: np.random.Generator, region: PlaneRegion, count: int):
    candidates = np.empty(count, dtype=np.complex128)
    candidates.real = rng.uniform(region.minimum.real, region.maximum.real, count)
    candidates.imag = rng.uniform(region.minimum.imag, region.maximum.imag, count)
    return candidates


def accumulate_candidates(
    partials: np.ndarray,
    candidates: np.ndarray,
    region: PlaneRegion,
    max_iterations: int,
) -> np.ndarray:
    """
    Trace every candidate and add its escaping orbit to the partial histogram of
    the worker that handled it.

    Returns a (workers, 3) array of rejected, escaped and accumulated counts.
    """
    return _accumulate_candidates(
        partials,
        np.ascontiguousarray(candidates, dtype=np.complex128),
        max_iterations,
        *region.bounds(),
    )


@njit(parallel=True, nogil=True)
def _accumulate_candidates(partials, candidates, max_iter, min_r, max_r, min_i, max_i):
    num_workers = partials.shape[0]
    num_candidates = candidates.shape[0]
    per_worker = (num_candidates + num_workers - 1) // num_workers
    stats = np.zeros((num_workers, 3), dtype=np.int64)

    for worker in prange(num_workers):
        histogram = partials[worker]
        orbit = np.empty(max_iter, dtype=np.complex128)
        start = worker * per_worker
        stop = min(start + per_worker, num_candidates)
        for k in range(start, stop):
            c = candidates[k]
            if is_rejected(c.real, c.imag):
                stats[worker, REJECTED] += 1
                continue

            length = trace_orbit_into(c, max_iter, orbit)
            if length == 0:
                continue

            stats[worker, ESCAPED] += 1
            stats[worker, ACCUMULATED] += accumulate_orbit(
                histogram, orbit, length, min_r, max_r, min_i, max_i
            )

    return stats


class CpuAccumulator:
    def __init__(self, config: BuddhabrotConfig):
        self.region = config.region
        self.max_iterations = config.max_iterations
        self.partials = make_partials(get_num_workers(config), config.image_size)

    def add(self, candidates: np.ndarray):
        return accumulate_candidates(
            self.partials, candidates, self.region, self.max_iterations
        )

    def histogram(self):
        return self.partials.sum(axis=0, dtype=np.int64)


def sample_histogram(
    config: BuddhabrotConfig,
    rng: Optional[np.random.Generator] = None,
    accumulator=None,
):
    if rng is None:
        rng = np.random.default_rng(config.seed)
    if accumulator is None:
        accumulator = CpuAccumulator(config)

    stats = SamplingStats()
    half_way = config.num_samples // 2
    half_way_reported = False

    start = time.time()
    while stats.samples < config.num_samples:
        count = min(CHUNK_SIZE, config.num_samples - stats.samples)
        candidates = draw_candidates(rng, config.region, count)
        stats.add(accumulator.add(candidates), count)

        if not half_way_reported and stats.samples > half_way:
            my_logger.info("Half of the samples calculated!")
            half_way_reported = True

    # every worker has finished before the partial histograms are merged
    histogram = accumulator.histogram()
    my_logger.debug(
        f"{stats.samples} samples, {stats.rejected} rejected, {stats.escaped} escaped, "
        f"{stats.accumulated} points plotted in {time.time() - start:.2f} seconds"
    )
    return histogram, stats


def render_pass(config: BuddhabrotConfig, rng: Optional[np.random.Generator] = None, accumulator=None):
    histogram, _ = sample_histogram(config, rng, accumulator)
    return normalize(histogram)
