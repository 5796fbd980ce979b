import argparse
from typing import List, Optional

from buddha.utils.buddhabrot_utils import (
    BuddhabrotConfig,
    PlaneRegion,
    format_complex,
    my_logger,
    parse_complex,
)
from buddha.utils.constants import (
    DEFAULT_IMAGE_SIZE,
    DEFAULT_MAX,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_MIN,
    DEFAULT_SAMPLES_PER_PIXEL,
)


def make_parser():
    parser = argparse.ArgumentParser(description="Render the Buddhabrot")
    parser.add_argument(
        "--size",
        type=int,
        help="The width and height of the image in pixels.",
        default=DEFAULT_IMAGE_SIZE,
    )
    parser.add_argument(
        "--samples",
        type=int,
        help=f"The number of random points sampled (default {DEFAULT_SAMPLES_PER_PIXEL} per pixel).",
        default=None,
    )
    parser.add_argument(
        "-i",
        "--iterations",
        type=int,
        help="The maximum number of iterations done for each sample.",
        default=DEFAULT_MAX_ITERATIONS,
    )
    parser.add_argument(
        "--min",
        type=str,
        help="the complex number at the minimum corner of the plane in '<real> <imag>' format",
        default=format_complex(DEFAULT_MIN),
    )
    parser.add_argument(
        "--max",
        type=str,
        help="the complex number at the maximum corner of the plane in '<real> <imag>' format",
        default=format_complex(DEFAULT_MAX),
    )
    parser.add_argument("--seed", type=int, help="Seed for the random sampler.", default=None)
    parser.add_argument(
        "--workers",
        type=int,
        help="Number of partial histograms sampled in parallel (0 uses every numba thread).",
        default=0,
    )
    parser.add_argument(
        "-g", "--gpu", action="store_true", help="Use GPU via opencl to render"
    )
    parser.add_argument("-log", "--log-level", choices=["debug", "info", "warning"], default="debug")
    return parser


def config_from_args(parser: argparse.ArgumentParser, argv: Optional[List[str]] = None):
    args = parser.parse_args(argv)
    my_logger.setLevel(args.log_level.upper())

    num_samples = args.samples
    if num_samples is None:
        num_samples = args.size * args.size * DEFAULT_SAMPLES_PER_PIXEL

    try:
        region = PlaneRegion(parse_complex(args.min), parse_complex(args.max))
        return BuddhabrotConfig(
            image_size=args.size,
            num_samples=num_samples,
            max_iterations=args.iterations,
            region=region,
            gpu=args.gpu,
            seed=args.seed,
            num_workers=args.workers,
        )
    except ValueError as e:
        parser.error(str(e))


def main(argv: Optional[List[str]] = None):
    config = config_from_args(make_parser(), argv)
    # tkinter is only needed once there is something to show
    from buddha.ui import tkinter_ui

    tkinter_ui.run(config)


if __name__ == "__main__":
    main()
