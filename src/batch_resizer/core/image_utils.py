"""Image and path utilities for the batch resizer."""

from pathlib import Path
from typing import Iterable, List, Union

from PIL import Image

from .exceptions import InvalidFileNameError
from .formats import extension_for, supported_extensions
from .models import Codec, ResizePreset

# Modes each encoder writes without conversion.
CODEC_MODES = {
    Codec.JPEG: ("1", "L", "RGB", "CMYK"),
    Codec.PNG: ("1", "L", "LA", "P", "RGB", "RGBA", "I", "I;16"),
    Codec.GIF: ("1", "L", "P", "RGB", "RGBA"),
    Codec.BMP: ("1", "L", "P", "RGB", "RGBA"),
    Codec.TIFF: ("1", "L", "LA", "P", "RGB", "RGBA", "CMYK", "I", "I;16", "F"),
    Codec.WEBP: ("RGB", "RGBA"),
}

ALPHA_MODES = ("LA", "La", "PA", "RGBA", "RGBa")


def file_stem(input_path: Union[str, Path]) -> str:
    """
    Return the stem of ``input_path``.

    Raises:
        InvalidFileNameError: If the path has no usable name component
    """
    path = Path(input_path)
    if path.name in ("", ".", "..") or not path.stem:
        raise InvalidFileNameError("Invalid file name", input_path)
    return path.stem


def build_output_path(
    input_path: Union[str, Path], output_dir: Union[str, Path], preset: ResizePreset
) -> Path:
    """
    Calculate the destination path for a resized copy of ``input_path``.

    The name is ``{stem}_resized_{width}x{height}.{ext}`` using the preset's
    requested size, not the aspect-corrected one.

    Args:
        input_path: Source image path
        output_dir: Directory the output is written to
        preset: Preset in effect for the batch

    Returns:
        Destination path

    Raises:
        InvalidFileNameError: If the input has no usable name
        UnsupportedFormatError: If no output extension can be resolved
    """
    stem = file_stem(input_path)
    extension = extension_for(preset.output_format, input_path)
    return Path(output_dir) / f"{stem}_resized_{preset.width}x{preset.height}.{extension}"


def find_images(paths: Iterable[Union[str, Path]]) -> List[Path]:
    """
    Expand ``paths`` into an ordered list of input files.

    Directories contribute their supported image files (non-recursive, sorted
    by name). Files are kept as given, supported or not, so that unusable
    inputs still show up as per-file failures.
    """
    extensions = set(supported_extensions())
    files: List[Path] = []

    for raw_path in paths:
        path = Path(raw_path)
        if path.is_dir():
            files.extend(
                sorted(
                    child
                    for child in path.iterdir()
                    if child.is_file() and child.suffix[1:].lower() in extensions
                )
            )
        else:
            files.append(path)

    return files


def prepare_for_codec(img: "Image.Image", codec: Codec) -> "Image.Image":
    """
    Convert ``img`` to a mode ``codec`` can store.

    Images already in a mode listed in ``CODEC_MODES`` are returned
    unchanged. Others become RGBA when they carry transparency and the codec
    stores it, and RGB otherwise (e.g. CMYK to PNG, LA to JPEG).
    """
    allowed = CODEC_MODES[codec]
    if img.mode in allowed:
        return img

    has_alpha = img.mode in ALPHA_MODES or (
        img.mode == "P" and "transparency" in img.info
    )
    return img.convert("RGBA" if has_alpha and "RGBA" in allowed else "RGB")
