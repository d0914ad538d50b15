"""
Cover image loading.

Pillow detects the image format and size; the bytes are embedded
untouched.
"""

import io

from PIL import Image, UnidentifiedImageError

# Pillow format name → (extension, media type)
SUPPORTED_FORMATS = {
    "BMP": ("bmp", "image/bmp"),
    "GIF": ("gif", "image/gif"),
    "JPEG": ("jpg", "image/jpeg"),
    "PNG": ("png", "image/png"),
    "WEBP": ("webp", "image/webp"),
}


class CoverError(Exception):
    """Raised when the cover image can't be read or isn't supported."""
    pass


class CoverImage:
    def __init__(self, data, extension, media_type, width, height):
        self.data = data
        self.extension = extension
        self.media_type = media_type
        self.width = width
        self.height = height

    @property
    def size(self):
        return (self.width, self.height)

    @property
    def href(self):
        """Location of the image inside the EPUB."""
        return f"img/cover.{self.extension}"


def load_cover(path):
    """Read and identify a cover image. Raises CoverError."""
    try:
        with open(path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise CoverError(f"failed to open cover image: {path!r} ({e.strerror or e})")

    try:
        with Image.open(io.BytesIO(data)) as img:
            image_format = img.format
            width, height = img.size
    except (UnidentifiedImageError, OSError) as e:
        raise CoverError(f"failed to recognize cover image format: {path!r} ({e})")

    if image_format not in SUPPORTED_FORMATS:
        raise CoverError(f"invalid format for cover image: {image_format}")

    extension, media_type = SUPPORTED_FORMATS[image_format]
    return CoverImage(data, extension, media_type, width, height)
