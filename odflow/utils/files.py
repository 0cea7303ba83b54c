"""
Uploaded file handling
"""

import io
import mimetypes
import os
from typing import Optional, Tuple

from PIL import Image, UnidentifiedImageError

from odflow.utils.exceptions import FileUploadError
from odflow.utils.helpers import log_error

IMAGE_TYPES = {'image/jpeg', 'image/jpg', 'image/png'}


def guess_content_type(file_name: str, declared: Optional[str] = None) -> str:
    if declared and declared != 'application/octet-stream':
        return declared
    guessed, _ = mimetypes.guess_type(file_name or '')
    return guessed or 'application/octet-stream'


def validate_upload(content: bytes, content_type: str, allowed_types: set, max_bytes: int) -> None:
    """
    Validate an uploaded certificate

    Raises:
        FileUploadError: If the file is empty, too large or of a wrong type
    """
    if not content:
        raise FileUploadError("Please select a file to upload")

    if content_type not in allowed_types:
        raise FileUploadError("Please upload a PDF or image file (JPG, PNG)")

    if len(content) > max_bytes:
        raise FileUploadError(f"File size must be less than {max_bytes // (1024 * 1024)}MB")


def compress_image(content: bytes, file_name: str, max_size=(1600, 1600),
                   quality: int = 80) -> Tuple[bytes, str, str]:
    """
    Compress and optimize an image for storage

    Args:
        content: Raw image bytes
        file_name: Original file name
        max_size: Bounding box the image is shrunk into
        quality: JPEG quality

    Returns:
        Tuple of (bytes, content_type, file_name); the original is kept when
        re-encoding fails or does not make it smaller

    Raises:
        FileUploadError: If the bytes are not a readable image
    """
    try:
        img = Image.open(io.BytesIO(content))
        img.load()
    except (UnidentifiedImageError, OSError):
        raise FileUploadError("Uploaded image could not be read")

    original_type = Image.MIME.get(img.format, 'image/jpeg')

    try:
        # JPEG only holds RGB and greyscale
        if img.mode not in ('RGB', 'L'):
            img = img.convert('RGB')

        # Resize if image is too large
        img.thumbnail(max_size, Image.Resampling.LANCZOS)

        output = io.BytesIO()
        img.save(output, format='JPEG', quality=quality, optimize=True)
        compressed = output.getvalue()
    except (OSError, ValueError) as e:
        log_error(f"Could not re-encode {file_name}, keeping the original", e)
        return content, original_type, file_name

    if len(compressed) < len(content):
        stem = os.path.splitext(file_name)[0] or 'certificate'
        return compressed, 'image/jpeg', f"{stem}.jpg"
    return content, original_type, file_name
