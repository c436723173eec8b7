"""Preview module for rendered output.

Components:
    export: PNG export, image loading and image comparison

The render kernel already produces display-ready 8-bit RGBA pixels (gamma 2,
clamped), so this module only moves pixels to and from files and compares
images, e.g. to check that noise shrinks as samples are added.

Example:
    >>> from raycaster.preview import save_png
    >>> save_png(renderer, "output.png")
"""

from raycaster.preview.export import (
    compute_rmse,
    load_image,
    save_image_from_array,
    save_png,
)

__all__ = [
    "save_png",
    "save_image_from_array",
    "load_image",
    "compute_rmse",
]
