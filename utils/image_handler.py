"""
Image Validation and Processing Module

Validates uploaded food photos before they are sent for analysis.
Re-encodes images through PIL to strip potential exploits and metadata.
"""

from io import BytesIO

from PIL import Image


class ImageValidationError(Exception):
    """Raised when an image fails validation."""
    pass


# Allowed image formats (PIL format names)
ALLOWED_FORMATS = {'JPEG', 'PNG', 'GIF', 'WEBP'}

# Maximum image dimensions (prevent decompression bombs)
MAX_WIDTH = 4096
MAX_HEIGHT = 4096

# Maximum file size (10MB)
MAX_FILE_SIZE = 10 * 1024 * 1024


def _read_image_bytes(image_data):
    """Read raw bytes from bytes or a file-like object, enforcing the size limit."""
    if isinstance(image_data, (bytes, bytearray)):
        content = bytes(image_data)
    else:
        # File-like object (e.g. werkzeug FileStorage)
        image_data.seek(0)
        content = image_data.read()

    if not content:
        raise ImageValidationError("Image is empty")
    if len(content) > MAX_FILE_SIZE:
        raise ImageValidationError(f"Image too large: {len(content)} bytes (max {MAX_FILE_SIZE})")
    return content


def prepare_food_photo(image_data, max_width=1024, max_height=1024):
    """
    Validate a food photo and re-encode it as JPEG bytes.

    Args:
        image_data: Raw image bytes or file-like object
        max_width: Maximum width to resize to (default 1024)
        max_height: Maximum height to resize to (default 1024)

    Returns:
        bytes: JPEG-encoded image

    Raises:
        ImageValidationError: If the image is invalid or potentially malicious
    """
    image_buffer = BytesIO(_read_image_bytes(image_data))

    try:
        # Open image with PIL (validates format)
        img = Image.open(image_buffer)

        # Verify it's actually an image (detects corrupted/fake files)
        img.verify()

        # Re-open after verify (verify() leaves file in uncertain state)
        image_buffer.seek(0)
        img = Image.open(image_buffer)

        # Check format
        if img.format not in ALLOWED_FORMATS:
            raise ImageValidationError(
                f"Invalid image format: {img.format}. "
                f"Allowed formats: {', '.join(sorted(ALLOWED_FORMATS))}"
            )

        # Check dimensions (prevent decompression bombs)
        width, height = img.size
        if width > MAX_WIDTH or height > MAX_HEIGHT:
            raise ImageValidationError(
                f"Image dimensions too large: {width}x{height}. "
                f"Maximum: {MAX_WIDTH}x{MAX_HEIGHT}"
            )

        # Resize if needed
        if width > max_width or height > max_height:
            img.thumbnail((max_width, max_height), Image.Resampling.LANCZOS)

        # Convert RGBA to RGB for JPEG (remove alpha channel)
        if img.mode in ('RGBA', 'LA', 'P'):
            # Create white background
            background = Image.new('RGB', img.size, (255, 255, 255))
            if img.mode != 'RGBA':
                img = img.convert('RGBA')
            background.paste(img, mask=img.split()[-1])
            img = background
        elif img.mode != 'RGB':
            img = img.convert('RGB')

        output = BytesIO()
        img.save(output, 'JPEG', quality=85, optimize=True)
        return output.getvalue()

    except ImageValidationError:
        raise
    except Image.DecompressionBombError:
        raise ImageValidationError("Image appears to be a decompression bomb (too large when decoded)")
    except Exception as e:
        raise ImageValidationError(f"Invalid or corrupted image: {str(e)}")
