import asyncio
import base64
import os

import structlog

from ..errors import ReadError
from ..models import EncodedPayload

logger = structlog.get_logger()


def read_image_bytes(file) -> bytes:
    """
    Reads the full binary content of an image source.
    Args:
        file (bytes | str | os.PathLike | BinaryIO): Raw bytes, a path or a readable binary file object.
    Returns:
        content (bytes): Whole file content.
    """
    if isinstance(file, (bytes, bytearray, memoryview)):
        return bytes(file)
    if isinstance(file, (str, os.PathLike)):
        with open(file, 'rb') as f:
            return f.read()
    if hasattr(file, 'seek'):
        file.seek(0)
    content = file.read()
    if not isinstance(content, bytes):
        raise ValueError("Image source did not return binary data")
    return content


async def encode(file, mime_type: str) -> EncodedPayload:
    """
    Reads an image and turns it into an inline transport payload.
    Args:
        file (bytes | str | os.PathLike | BinaryIO): Image source.
        mime_type (str): MIME type paired with the encoded data.
    Returns:
        payload (EncodedPayload): Base64 data of the raw bytes plus `mime_type`.
    Raises:
        ReadError: If the source cannot be read.
    """
    try:
        content = await asyncio.to_thread(read_image_bytes, file)
    except (OSError, ValueError) as e:
        logger.warning("Image read failed", error=str(e))
        raise ReadError(f"Could not read image: {e}") from e

    data = base64.b64encode(content).decode('ascii')
    logger.debug("Image encoded", mime_type=mime_type, raw_bytes=len(content), encoded_chars=len(data))
    return EncodedPayload(data=data, mime_type=mime_type)


def decode(payload: EncodedPayload) -> bytes:
    return payload.to_bytes()
