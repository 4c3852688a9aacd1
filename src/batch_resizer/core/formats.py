"""Output codec and extension resolution."""

from pathlib import Path
from typing import Any, Dict, List, Union

from .exceptions import UnsupportedFormatError
from .models import Codec, OutputFormat

PathLike = Union[str, Path]

JPEG_QUALITY = 100

EXTENSION_CODECS: Dict[str, Codec] = {
    "jpg": Codec.JPEG,
    "jpeg": Codec.JPEG,
    "png": Codec.PNG,
    "gif": Codec.GIF,
    "bmp": Codec.BMP,
    "tiff": Codec.TIFF,
    "tif": Codec.TIFF,
    "webp": Codec.WEBP,
}

EXPLICIT_CODECS: Dict[OutputFormat, Codec] = {
    OutputFormat.JPEG: Codec.JPEG,
    OutputFormat.PNG: Codec.PNG,
    OutputFormat.WEBP: Codec.WEBP,
    OutputFormat.BMP: Codec.BMP,
    OutputFormat.TIFF: Codec.TIFF,
}

EXPLICIT_EXTENSIONS: Dict[OutputFormat, str] = {
    OutputFormat.JPEG: "jpg",
    OutputFormat.PNG: "png",
    OutputFormat.WEBP: "webp",
    OutputFormat.BMP: "bmp",
    OutputFormat.TIFF: "tiff",
}


def supported_extensions() -> List[str]:
    """Extensions (without dot) accepted as input."""
    return list(EXTENSION_CODECS)


def _source_extension(input_path: PathLike) -> str:
    suffix = Path(input_path).suffix
    if not suffix or suffix == ".":
        raise UnsupportedFormatError("No file extension found", input_path)
    return suffix[1:]


def codec_for_extension(extension: str) -> Codec:
    """
    Map a file extension (without dot, any case) to its codec.

    Raises:
        UnsupportedFormatError: If the extension is not a supported image type
    """
    try:
        return EXTENSION_CODECS[extension.lower()]
    except KeyError:
        raise UnsupportedFormatError(f"Unsupported image format: {extension}") from None


def resolve_codec(choice: OutputFormat, input_path: PathLike) -> Codec:
    """
    Resolve the codec used to write the output for ``input_path``.

    ``KEEP_ORIGINAL`` follows the input extension; explicit choices ignore it.

    Raises:
        UnsupportedFormatError: If the input extension is missing or unknown
    """
    if choice is OutputFormat.KEEP_ORIGINAL:
        extension = _source_extension(input_path)
        try:
            return codec_for_extension(extension)
        except UnsupportedFormatError as e:
            raise UnsupportedFormatError(e.message, input_path) from None
    return EXPLICIT_CODECS[choice]


def extension_for(choice: OutputFormat, input_path: PathLike) -> str:
    """
    Extension (without dot) for the output file.

    ``KEEP_ORIGINAL`` reuses the input extension verbatim, so ``photo.JPG``
    stays ``JPG``.

    Raises:
        UnsupportedFormatError: If the input extension is missing or unknown
    """
    if choice is OutputFormat.KEEP_ORIGINAL:
        # Validates the extension as a side effect.
        resolve_codec(choice, input_path)
        return _source_extension(input_path)
    return EXPLICIT_EXTENSIONS[choice]


def encoder_options(codec: Codec) -> Dict[str, Any]:
    """Keyword arguments passed to ``Image.save`` for ``codec``."""
    if codec is Codec.JPEG:
        return {"quality": JPEG_QUALITY}
    return {}
