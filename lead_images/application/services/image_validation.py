import base64
import binascii
import logging
import os
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)

MAX_IMAGE_SIZE_BYTES = 5 * 1024 * 1024  # 5MB
ALLOWED_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".webp")

# Well-formed payloads that match no signature are reported as JPEG
FALLBACK_CONTENT_TYPE = "image/jpeg"
UNDECODABLE_CONTENT_TYPE = "application/octet-stream"

if os.name == "nt":
    INVALID_FILE_NAME_CHARS = frozenset('<>:"/\\|?*') | frozenset(chr(c) for c in range(32))
else:
    INVALID_FILE_NAME_CHARS = frozenset("\0/")


def decode_payload(payload: Optional[str]) -> Optional[bytes]:
    """Decode a base64 payload, accepting an optional data URL header.

    Whitespace inside the payload is ignored. Returns None when the payload
    is not valid base64.
    """
    if payload is None:
        return None
    data = payload
    # Handle data URL format
    if data.startswith("data:") and "," in data:
        _, data = data.split(",", 1)
    try:
        return base64.b64decode("".join(data.split()), validate=True)
    except (binascii.Error, ValueError):
        return None


def sniff_content_type(data: bytes) -> Optional[str]:
    """Match leading bytes against the supported signatures, in priority order."""
    if len(data) < 4:
        return None

    # JPEG: FF D8 FF
    if data[:3] == b"\xff\xd8\xff":
        return "image/jpeg"

    # PNG: 89 50 4E 47
    if data[:4] == b"\x89PNG":
        return "image/png"

    # GIF: 47 49 46
    if data[:3] == b"GIF":
        return "image/gif"

    # WebP: RIFF container with a WEBP form type at offset 8
    if len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"

    return None


@dataclass
class ImageValidator:
    max_size: int = MAX_IMAGE_SIZE_BYTES

    def is_admissible_image(self, payload: Optional[str]) -> bool:
        if payload is None or not payload.strip():
            return False
        data = decode_payload(payload)
        if data is None:
            return False
        if len(data) > self.max_size:
            logger.info(f"Rejecting image of {len(data)} bytes (limit {self.max_size})")
            return False
        return sniff_content_type(data) is not None

    def is_admissible_file_name(self, name: Optional[str]) -> bool:
        if name is None or not name.strip():
            return False
        if any(c in INVALID_FILE_NAME_CHARS for c in name):
            return False
        _, dot, extension = name.rpartition(".")
        if not dot:
            return False
        return f".{extension.lower()}" in ALLOWED_EXTENSIONS

    def detect_content_type(self, payload: Optional[str]) -> str:
        data = decode_payload(payload)
        if data is None or len(data) < 4:
            return UNDECODABLE_CONTENT_TYPE
        return sniff_content_type(data) or FALLBACK_CONTENT_TYPE

    def decoded_size(self, payload: Optional[str]) -> int:
        data = decode_payload(payload)
        return len(data) if data is not None else 0
