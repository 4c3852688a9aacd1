"""Output dimension resolution."""

import math
from typing import Tuple

from .exceptions import DegenerateImageError, InvalidPresetError


def _round_half_up(value: float) -> int:
    # round() rounds half to even; output sizes round half away from zero.
    return int(math.floor(value + 0.5))


def resolve_dimensions(
    original_width: int,
    original_height: int,
    target_width: int,
    target_height: int,
    maintain_aspect_ratio: bool,
) -> Tuple[int, int]:
    """
    Compute the output size for a resize.

    Without aspect preservation the target size is returned unchanged. With
    it, the smaller target side is kept exactly and the other side follows
    the source aspect ratio, rounded to the nearest pixel and never below 1.

    Args:
        original_width: Decoded source width in pixels
        original_height: Decoded source height in pixels
        target_width: Requested width
        target_height: Requested height
        maintain_aspect_ratio: Preserve the source aspect ratio

    Returns:
        (width, height) of the output image

    Raises:
        DegenerateImageError: If the source has zero width or height
        InvalidPresetError: If the target width or height is not positive
    """
    if original_width <= 0 or original_height <= 0:
        raise DegenerateImageError(
            f"Source image has zero area ({original_width}x{original_height})"
        )
    if target_width <= 0 or target_height <= 0:
        raise InvalidPresetError(
            f"Target size {target_width}x{target_height} must be positive"
        )

    if not maintain_aspect_ratio:
        return target_width, target_height

    # Scale by the integer ratio; exact halves must stay exact.
    if target_width <= target_height:
        derived = target_width * original_height / original_width
        return target_width, max(1, _round_half_up(derived))
    derived = target_height * original_width / original_height
    return max(1, _round_half_up(derived)), target_height
