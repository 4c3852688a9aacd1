"""Service implementations for the resize pipeline."""

import time
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple

from PIL import Image

from .dimensions import resolve_dimensions
from .error_handling import BatchOperationContextManager, with_error_handling
from .exceptions import (
    BatchSetupError,
    DecodeError,
    ImageProcessingError,
    InvalidFileNameError,
    ResizerError,
    WriteError,
)
from .formats import encoder_options, resolve_codec
from .image_utils import build_output_path, prepare_for_codec
from .models import Codec, ResizePreset, ResizeResult
from .observability import LogContext, MetricsCollector, ResizeMetric
from .protocols import (
    BatchProcessor,
    ImageBackendProtocol,
    LoggerProtocol,
    ProgressCallback,
    ResizeService,
)

RESAMPLING_FILTER = Image.Resampling.LANCZOS


class PillowImageBackend:
    """Image backend built on Pillow."""

    @with_error_handling(DecodeError, "decode image")
    def open(self, path: Path) -> Image.Image:
        # Decode fully so truncated files fail here, and release the file
        # handle before returning (multi-frame sources keep it open otherwise).
        with Image.open(path) as img:
            img.load()
            return img.copy()

    def resize(self, img: Image.Image, size: Tuple[int, int]) -> Image.Image:
        # Pillow falls back to nearest-neighbour for palette and bilevel
        # images, so those are expanded before resampling.
        if img.mode == "P":
            img = img.convert("RGBA" if "transparency" in img.info else "RGB")
        elif img.mode == "1":
            img = img.convert("L")
        return img.resize(size, RESAMPLING_FILTER)

    @with_error_handling(WriteError, "write image")
    def save(self, img: Image.Image, path: Path, codec: Codec) -> None:
        img.save(path, format=codec.value, **encoder_options(codec))


class ImageResizeService(ResizeService):
    """Resizes a single image file to a preset."""

    def __init__(
        self,
        backend: ImageBackendProtocol,
        logger: LoggerProtocol,
        metrics_collector: Optional[MetricsCollector] = None,
    ):
        self._backend = backend
        self._logger = logger
        self._metrics_collector = metrics_collector

    def process(
        self, input_path: Path, output_path: Path, preset: ResizePreset
    ) -> Tuple[int, int]:
        """
        Decode, resize and encode one image.

        The resize is exact when the preset ignores the aspect ratio and
        aspect-preserving otherwise; both always use the Lanczos filter.

        Returns:
            (width, height) of the written image

        Raises:
            DecodeError: If the source cannot be read or decoded
            DegenerateImageError: If the source has zero area
            UnsupportedFormatError: If no output codec can be resolved
            WriteError: If the destination cannot be written
        """
        input_path = Path(input_path)
        output_path = Path(output_path)
        log_context = LogContext(
            operation="process_image", component="image_resize_service"
        ).with_metadata(
            source=input_path.name,
            dest=output_path.name,
            preset=preset.name,
        )

        start_time = time.time()
        success = False
        new_size = None
        error_kind = None

        try:
            self._logger.debug("Decoding image", log_context.with_operation("decode_image"))
            img = self._backend.open(input_path)

            new_size = resolve_dimensions(
                img.width,
                img.height,
                preset.width,
                preset.height,
                preset.maintain_aspect_ratio,
            )
            self._logger.debug(
                "Resizing image",
                log_context.with_operation("resize_image"),
                original=f"{img.width}x{img.height}",
                target=f"{new_size[0]}x{new_size[1]}",
            )
            resized = self._backend.resize(img, new_size)

            codec = resolve_codec(preset.output_format, input_path)
            self._logger.debug(
                f"Encoding as {codec.value}", log_context.with_operation("encode_image")
            )
            self._backend.save(prepare_for_codec(resized, codec), output_path, codec)

            success = True
            return new_size

        except ResizerError as e:
            error_kind = e.kind
            self._logger.error(
                "Image resize failed", log_context.with_metadata(error=str(e))
            )
            raise

        finally:
            end_time = time.time()
            if success:
                self._logger.info(
                    "Successfully resized image",
                    log_context,
                    processing_time_ms=round((end_time - start_time) * 1000, 1),
                )
            if self._metrics_collector is not None:
                self._metrics_collector.record(
                    ResizeMetric(
                        source=str(input_path),
                        start_time=start_time,
                        end_time=end_time,
                        success=success,
                        error_kind=error_kind,
                        output_size=new_size if success else None,
                    )
                )


class BatchResizeOrchestrator(BatchProcessor):
    """Resizes an ordered list of files one at a time."""

    def __init__(self, resize_service: ResizeService, logger: LoggerProtocol):
        self._resize_service = resize_service
        self._logger = logger

    def run(
        self,
        input_paths: Iterable[Any],
        output_dir: Path,
        preset: ResizePreset,
        on_progress: Optional[ProgressCallback] = None,
    ) -> List[ResizeResult]:
        """
        Resize every input in order and return one outcome per input.

        ``on_progress(i, total)`` is called before item ``i`` and once more
        with ``(total, total)`` after the last item. A failing file never
        stops the batch; its error is stored in its slot instead.

        Raises:
            BatchSetupError: If ``input_paths`` cannot be enumerated
        """
        try:
            items = list(input_paths)
        except TypeError as e:
            raise BatchSetupError(f"Cannot enumerate input files: {e}") from e

        output_dir = Path(output_dir)
        total = len(items)
        results: List[ResizeResult] = []

        self._logger.info(
            f"Resizing {total} file(s) to {preset.width}x{preset.height} "
            f"with preset '{preset.name}' into {output_dir}"
        )

        with BatchOperationContextManager(
            operation_name=f"Resize batch ({preset.name})"
        ) as batch_manager:
            for index, raw_path in enumerate(items):
                if on_progress is not None:
                    on_progress(index, total)

                result = self._process_item(raw_path, output_dir, preset)
                if not result.success:
                    batch_manager.add_error(
                        error_message=str(result.error),
                        item_identifier=str(result.source_path),
                    )
                results.append(result)

            if on_progress is not None:
                on_progress(total, total)

        successful = sum(1 for r in results if r.success)
        self._logger.info(
            f"Batch finished: {successful} successful, {total - successful} failed"
        )
        return results

    def _process_item(
        self, raw_path: Any, output_dir: Path, preset: ResizePreset
    ) -> ResizeResult:
        start_time = time.time()

        try:
            input_path = Path(raw_path)
        except TypeError:
            return ResizeResult(
                source_path=Path(str(raw_path)),
                error=InvalidFileNameError(f"Not a file path: {raw_path!r}"),
            )

        result = ResizeResult(source_path=input_path)
        try:
            output_path = build_output_path(input_path, output_dir, preset)
            result.output_path = output_path
            result.output_size = self._resize_service.process(
                input_path, output_path, preset
            )
        except ResizerError as e:
            result.error = e
        except Exception as e:  # noqa: BLE001
            self._logger.error(f"Unhandled error resizing {input_path}: {e}")
            error = ImageProcessingError(f"Unexpected error: {e}", input_path)
            error.__cause__ = e
            result.error = error

        if not result.success:
            # Only successful outcomes carry a path.
            result.output_path = None

        result.processing_time = time.time() - start_time
        return result
