import logging
from dataclasses import dataclass
from typing import Optional

logging.basicConfig(format="%(levelname)s: %(message)s")
my_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlaneRegion:
    minimum: complex
    maximum: complex

    def __post_init__(self):
        if not (
            self.minimum.real < self.maximum.real
            and self.minimum.imag < self.maximum.imag
        ):
            raise ValueError(
                f"region minimum {self.minimum} must be below maximum {self.maximum} on both axes"
            )

    def bounds(self):
        return (
            self.minimum.real,
            self.maximum.real,
            self.minimum.imag,
            self.maximum.imag,
        )


@dataclass()
class BuddhabrotConfig:
    image_size: int
    num_samples: int
    max_iterations: int
    region: PlaneRegion
    gpu: bool = False
    seed: Optional[int] = None
    num_workers: int = 0

    def __post_init__(self):
        self.validate()

    def validate(self):
        if self.image_size <= 0:
            raise ValueError("image size must be positive")
        if self.num_samples < 0:
            raise ValueError("number of samples can't be negative")
        if self.max_iterations < 0:
            raise ValueError("max iterations can't be negative")
        if self.num_workers < 0:
            raise ValueError("number of workers can't be negative")


def parse_complex(text: str) -> complex:
    parts = text.replace(",", " ").split()
    if len(parts) != 2:
        raise ValueError(f"expected '<real> <imag>', got {text!r}")
    return complex(float(parts[0]), float(parts[1]))


def format_complex(value: complex) -> str:
    return f"{value.real!r} {value.imag!r}"


def make_cli_args(config: BuddhabrotConfig):
    args = (
        f"--size {config.image_size} --samples {config.num_samples} -i {config.max_iterations}"
        f' --min "{format_complex(config.region.minimum)}"'
        f' --max "{format_complex(config.region.maximum)}"'
    )

    if config.seed is not None:
        args += f" --seed {config.seed}"

    if config.num_workers:
        args += f" --workers {config.num_workers}"

    if config.gpu:
        args += " -g"

    return args
