"""Image export utilities for rendered images.

Rendered images are already gamma corrected and quantized to 8-bit RGBA by
the render kernel, so export is a direct write through Pillow.

Example:
    >>> from raycaster.preview.export import save_png
    >>> from raycaster.core.renderer import Renderer
    >>>
    >>> renderer = Renderer(settings)
    >>> renderer.render()
    >>> save_png(renderer, "output.png")
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

if TYPE_CHECKING:
    from raycaster.core.renderer import Renderer


def save_image_from_array(pixels: npt.NDArray[np.uint8], filepath: str | Path) -> None:
    """Save an RGBA pixel array to a file.

    Args:
        pixels: Array of shape (H, W, 4) with dtype uint8.
        filepath: Output path; the format follows the extension.

    Raises:
        ValueError: If the array is not an (H, W, 4) uint8 image.
    """
    if pixels.ndim != 3 or pixels.shape[2] != 4:
        raise ValueError(f"Expected an (H, W, 4) RGBA array, got shape {pixels.shape}")
    if pixels.dtype != np.uint8:
        raise ValueError(f"Expected dtype uint8, got {pixels.dtype}")

    PILImage.fromarray(pixels).save(filepath)


def save_png(renderer: Renderer, filepath: str | Path) -> None:
    """Save the renderer's image as a PNG file.

    Args:
        renderer: The Renderer whose image to save.
        filepath: Output file path (should end in .png).
    """
    save_image_from_array(renderer.get_pixels(), filepath)


def load_image(filepath: str | Path) -> npt.NDArray[np.uint8]:
    """Load an image file as an RGBA uint8 array of shape (H, W, 4)."""
    with PILImage.open(filepath) as image:
        return np.asarray(image.convert("RGBA"), dtype=np.uint8).copy()


def compute_rmse(
    image_a: npt.NDArray[np.generic],
    image_b: npt.NDArray[np.generic],
) -> float:
    """Compute root mean squared error between two images.

    Args:
        image_a: First image array.
        image_b: Second image array (must have same shape as image_a).

    Returns:
        RMSE value (lower is more similar).

    Raises:
        ValueError: If image shapes don't match.
    """
    if image_a.shape != image_b.shape:
        raise ValueError(
            f"Image shapes must match: {image_a.shape} vs {image_b.shape}"
        )

    diff = image_a.astype(np.float64) - image_b.astype(np.float64)
    return float(np.sqrt(np.mean(diff**2)))
