import asyncio
from io import BytesIO

import structlog
from PIL import Image, ImageOps, UnidentifiedImageError

from ..errors import CompressionError, ReadError
from ..models import CompressedImage, CompressionOptions
from .image_codec_service import read_image_bytes

logger = structlog.get_logger()

# Pillow formats written back as-is; anything else is re-encoded as JPEG
OUTPUT_FORMATS = {
    'JPEG': 'image/jpeg',
    'PNG': 'image/png',
    'WEBP': 'image/webp',
}
LOSSY_FORMATS = {'JPEG', 'WEBP'}

INITIAL_QUALITY = 90
MIN_QUALITY = 10
SHRINK_FACTOR = 0.9
MAX_ITERATIONS = 50


def _open_image(content: bytes) -> tuple[Image.Image, str | None]:
    try:
        with Image.open(BytesIO(content)) as img:
            img.load()
            image_format = img.format
            oriented = ImageOps.exif_transpose(img)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError, SyntaxError) as e:
        raise CompressionError(f"Unsupported or malformed image: {e}") from e
    return oriented, image_format


def _prepare_mode(img: Image.Image, output_format: str) -> Image.Image:
    if output_format == 'JPEG' and img.mode not in ('RGB', 'L'):
        return img.convert('RGB')
    if output_format == 'WEBP' and img.mode not in ('RGB', 'RGBA'):
        return img.convert('RGBA' if 'A' in img.getbands() else 'RGB')
    if output_format == 'PNG' and img.mode not in ('1', 'L', 'LA', 'P', 'RGB', 'RGBA', 'I', 'I;16'):
        return img.convert('RGBA' if 'A' in img.getbands() else 'RGB')
    return img


def _save(img: Image.Image, output_format: str, quality: int) -> bytes:
    buffer = BytesIO()
    if output_format in LOSSY_FORMATS:
        img.save(buffer, format=output_format, quality=quality)
    else:
        img.save(buffer, format=output_format, optimize=True)
    return buffer.getvalue()


def compress_image(content: bytes, options: CompressionOptions, mime_type: str | None = None) -> CompressedImage:
    """
    Shrinks an image until it fits the size and dimension budget.

    The longer side is first scaled down to `options.max_dimension_px`. While the encoded
    output is still over budget, dimensions and (for lossy formats) quality are reduced by
    `SHRINK_FACTOR` per iteration. Images already inside the budget are returned unchanged.

    Args:
        content (bytes): Original image bytes.
        options (CompressionOptions): Size (MB) and dimension (px) limits.
        mime_type (str): MIME type reported for the original, used for pass-through results.
    Returns:
        compressed (CompressedImage): Output satisfying both limits, never larger than `content`.
    Raises:
        CompressionError: On malformed/unsupported data or when the budget cannot be met.
    """
    img, image_format = _open_image(content)
    width, height = img.size
    max_bytes = options.max_size_bytes
    longest = max(width, height)

    if len(content) <= max_bytes and longest <= options.max_dimension_px:
        logger.debug("Image already within budget", size=len(content), width=width, height=height)
        return CompressedImage(
            content=content,
            mime_type=mime_type or OUTPUT_FORMATS.get(image_format, 'application/octet-stream'),
            width=width,
            height=height,
        )

    output_format = image_format if image_format in OUTPUT_FORMATS else 'JPEG'
    img = _prepare_mode(img, output_format)
    budget = min(max_bytes, len(content))
    scale = min(1.0, options.max_dimension_px / longest)
    quality = INITIAL_QUALITY

    for iteration in range(MAX_ITERATIONS):
        target = (max(1, int(width * scale)), max(1, int(height * scale)))
        resized = img if target == img.size else img.resize(target, Image.Resampling.LANCZOS)
        data = _save(resized, output_format, quality)
        if len(data) <= budget:
            logger.info(
                "Image compressed",
                original_size=len(content),
                compressed_size=len(data),
                width=target[0],
                height=target[1],
                iterations=iteration + 1,
            )
            return CompressedImage(
                content=data,
                mime_type=OUTPUT_FORMATS[output_format],
                width=target[0],
                height=target[1],
            )
        scale *= SHRINK_FACTOR
        if output_format in LOSSY_FORMATS:
            quality = max(MIN_QUALITY, int(quality * SHRINK_FACTOR))

    raise CompressionError(
        f"Could not compress image below {options.max_size_mb} MB after {MAX_ITERATIONS} attempts"
    )


async def compress(file, constraints: CompressionOptions, mime_type: str | None = None) -> CompressedImage:
    """
    Compresses an image in a worker thread so request handling is never blocked by Pillow.
    """
    try:
        content = await asyncio.to_thread(read_image_bytes, file)
    except (OSError, ValueError) as e:
        raise ReadError(f"Could not read image: {e}") from e
    return await asyncio.to_thread(compress_image, content, constraints, mime_type)
