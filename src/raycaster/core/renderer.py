"""Render driver producing RGBA images band by band.

This module wraps the integrator's render target in a Renderer object that:
- Renders the image in bands of rows
- Reports progress through a callback or a generator
- Checks a cancellation predicate between bands
- Hands the finished image back as NumPy pixels, raw RGBA bytes, or a file

Every pixel in a band is rendered to completion (all samples, all bounces)
before the band finishes, so cancelling never leaves a half-sampled pixel.

Example:
    >>> from raycaster.config import RenderSettings, init_backend
    >>> settings = RenderSettings(width=200, height=100)
    >>> init_backend(settings)
    >>> from raycaster.core.renderer import Renderer
    >>> from raycaster.scene.default_scene import create_default_scene
    >>> from raycaster.camera.fixed import setup_camera
    >>>
    >>> scene, camera = create_default_scene()
    >>> setup_camera(camera)
    >>> renderer = Renderer(settings)
    >>> renderer.render()
    >>> renderer.save_image("spheres.png")
"""

import logging
import time
from collections.abc import Callable, Generator
from pathlib import Path

import numpy as np
import numpy.typing as npt

from raycaster.config import RenderSettings
from raycaster.core.integrator import (
    clear_render_target,
    get_pixels_numpy,
    render_rows,
    setup_render_target,
)

logger = logging.getLogger(__name__)

# Callback receives (rows_done, total_rows)
ProgressCallback = Callable[[int, int], None]

# Returns True when the render should stop
CancelCheck = Callable[[], bool]


class Renderer:
    """Renders the current scene through the current camera.

    The renderer owns the image size and sampling parameters; the scene and
    camera are whatever was last loaded into the Taichi fields
    (SceneManager, setup_camera).

    Attributes:
        settings: The render settings in use.
    """

    def __init__(self, settings: RenderSettings) -> None:
        """Initialize the renderer and its render target.

        Args:
            settings: Render settings. Validated here.

        Raises:
            ValueError: If the settings are invalid.
        """
        settings.validate()
        self.settings = settings
        self._rows_done = 0
        setup_render_target(settings.width, settings.height)

    @property
    def width(self) -> int:
        """Get the image width."""
        return self.settings.width

    @property
    def height(self) -> int:
        """Get the image height."""
        return self.settings.height

    @property
    def rows_done(self) -> int:
        """Number of rows rendered since the last reset."""
        return self._rows_done

    @property
    def is_complete(self) -> bool:
        """Whether every row has been rendered."""
        return self._rows_done >= self.height

    def reset(self) -> None:
        """Clear the image so the next render starts from the top row."""
        clear_render_target()
        self._rows_done = 0

    def render_progressive(self) -> Generator[tuple[int, int], None, None]:
        """Render the remaining rows, yielding after each band.

        Yields:
            Tuple of (rows_done, total_rows).

        Example:
            >>> for done, total in renderer.render_progressive():
            ...     print(f"Progress: {done}/{total} rows")
        """
        settings = self.settings
        while self._rows_done < self.height:
            row_end = min(self._rows_done + settings.rows_per_batch, self.height)
            render_rows(
                self._rows_done,
                row_end,
                settings.samples_per_pixel,
                settings.max_depth,
                settings.t_min,
            )
            self._rows_done = row_end
            logger.debug(f"Rendered rows up to {row_end}/{self.height}")
            yield (self._rows_done, self.height)

    def render(
        self,
        callback: ProgressCallback | None = None,
        should_cancel: CancelCheck | None = None,
    ) -> bool:
        """Render the remaining rows of the image.

        Args:
            callback: Optional function called after each band with
                (rows_done, total_rows).
            should_cancel: Optional predicate checked before each band. When
                it returns True the render stops; rows rendered so far are
                kept and a later call resumes where this one stopped.

        Returns:
            True if the image is complete, False if the render was cancelled.
        """
        start_time = time.perf_counter()
        progress = self.render_progressive()
        while not self.is_complete:
            if should_cancel is not None and should_cancel():
                logger.info(f"Render cancelled after {self._rows_done}/{self.height} rows")
                return False
            done, total = next(progress)
            if callback is not None:
                callback(done, total)

        elapsed = time.perf_counter() - start_time
        logger.info(
            f"Rendered {self.width}x{self.height} at "
            f"{self.settings.samples_per_pixel} spp in {elapsed:.2f}s"
        )
        return True

    def get_pixels(self) -> npt.NDArray[np.uint8]:
        """Get the image as an RGBA array of shape (height, width, 4)."""
        return get_pixels_numpy()

    def to_bytes(self) -> bytes:
        """Get the image as RGBA bytes, row-major from the top-left pixel."""
        return self.get_pixels().tobytes()

    def save_image(self, filepath: str | Path) -> None:
        """Save the image to a file; the format follows the extension."""
        from raycaster.preview.export import save_image_from_array

        save_image_from_array(self.get_pixels(), filepath)
        logger.info(f"Saved image to {filepath}")

    def __repr__(self) -> str:
        """Return a string representation of the renderer state."""
        return (
            f"Renderer(width={self.width}, height={self.height}, "
            f"samples_per_pixel={self.settings.samples_per_pixel}, "
            f"rows_done={self.rows_done})"
        )
