"""Render settings and Taichi backend initialization.

This module declares no Taichi fields, so it can be imported before
ti.init() is called. Modules that declare fields (camera, materials,
scene, integrator) must be imported after initialization.

Example:
    >>> from raycaster.config import RenderSettings, init_backend
    >>> settings = RenderSettings(width=200, height=100, samples_per_pixel=50)
    >>> init_backend(settings)
"""

import logging
from dataclasses import dataclass
from typing import Literal

import taichi as ti

logger = logging.getLogger(__name__)

# Maximum number of scatter events along a path
MAX_DEPTH = 50

# Samples per pixel used when none is given
DEFAULT_SAMPLES = 100

# Lower bound of the intersection interval; keeps scattered rays from
# re-hitting the surface they leave
T_MIN = 0.001

# Largest supported image (render buffers are preallocated to this size)
MAX_IMAGE_WIDTH = 2048
MAX_IMAGE_HEIGHT = 2048

Arch = Literal["cpu", "gpu"]


@dataclass
class RenderSettings:
    """Parameters of a single render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Jittered samples averaged per pixel.
        max_depth: Scatter events allowed along one path.
        t_min: Lower bound of the intersection interval.
        rows_per_batch: Rows rendered between progress updates and
            cancellation checks.
        arch: Taichi backend to initialize ("cpu" or "gpu").
        seed: Optional seed for Taichi's random generator. Without one the
            sample noise differs from run to run.
    """

    width: int = 400
    height: int = 200
    samples_per_pixel: int = DEFAULT_SAMPLES
    max_depth: int = MAX_DEPTH
    t_min: float = T_MIN
    rows_per_batch: int = 16
    arch: Arch = "cpu"
    seed: int | None = None

    def validate(self) -> None:
        """Check that every setting is usable.

        Raises:
            ValueError: If any setting is out of range.
        """
        if not 0 < self.width <= MAX_IMAGE_WIDTH:
            raise ValueError(f"width must be in [1, {MAX_IMAGE_WIDTH}], got {self.width}")
        if not 0 < self.height <= MAX_IMAGE_HEIGHT:
            raise ValueError(f"height must be in [1, {MAX_IMAGE_HEIGHT}], got {self.height}")
        if self.samples_per_pixel < 1:
            raise ValueError(f"samples_per_pixel must be at least 1, got {self.samples_per_pixel}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {self.max_depth}")
        if self.t_min <= 0.0:
            raise ValueError(f"t_min must be positive, got {self.t_min}")
        if self.rows_per_batch < 1:
            raise ValueError(f"rows_per_batch must be at least 1, got {self.rows_per_batch}")
        if self.arch not in ("cpu", "gpu"):
            raise ValueError(f"Unknown arch: {self.arch!r} (expected 'cpu' or 'gpu')")

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height


def init_backend(settings: RenderSettings) -> str:
    """Initialize the Taichi runtime for the given settings.

    A GPU request falls back to the CPU backend when no GPU is usable.

    Args:
        settings: The render settings; only arch and seed are read.

    Returns:
        The name of the backend that was initialized.
    """
    settings.validate()

    kwargs = {}
    if settings.seed is not None:
        kwargs["random_seed"] = settings.seed

    backend = "cpu"
    if settings.arch == "gpu":
        try:
            ti.init(arch=ti.gpu, **kwargs)
            backend = "gpu"
        except Exception as e:
            logger.warning(f"GPU backend unavailable ({e}), falling back to CPU")
            ti.init(arch=ti.cpu, **kwargs)
    else:
        ti.init(arch=ti.cpu, **kwargs)

    logger.info(f"Taichi initialized on {backend} (seed={settings.seed})")
    return backend
