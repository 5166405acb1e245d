#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Asset Embedder

Turns an inline image payload (data URI) into a named binary resource
that can be packed into the archive.

Version: 1.0.0
"""

from dataclasses import dataclass
from typing import Optional
import base64
import binascii
import io
import logging
import re

from lxml import etree
from PIL import Image, UnidentifiedImageError

from config.constants import IMAGE_EXTENSIONS, IMAGE_MEDIA_TYPES, IMAGES_DIR, MAX_ASSET_SIZE_MB
from inkverse.contracts import UnsupportedAsset

logger = logging.getLogger(__name__)

DATA_URI_PATTERN = re.compile(
    r"^data:image/(?P<subtype>[A-Za-z0-9.+-]+)"
    r"(?:;[A-Za-z0-9.+-]+=[^;,]*)*"
    r";base64,(?P<data>.*)\Z",
    re.DOTALL,
)

SVG_PARSER = etree.XMLParser(resolve_entities=False, no_network=True)

# Pillow format name -> media type, for the raster types we accept
PILLOW_FORMATS = {
    "JPEG": "image/jpeg",
    "PNG": "image/png",
    "GIF": "image/gif",
    "WEBP": "image/webp",
}


@dataclass(frozen=True)
class EmbeddedAsset:
    """A decoded image ready to be packed"""
    index: int
    resource_name: str
    media_type: str
    data: bytes
    source_uri: str

    @property
    def manifest_id(self) -> str:
        return f"img_{self.index}"

    @property
    def href(self) -> str:
        """Path relative to the package document"""
        return f"{IMAGES_DIR}/{self.resource_name}"


class AssetEmbedder:
    """
    Decodes inline image payloads.

    Usage:
        embedder = AssetEmbedder()
        asset = embedder.embed(record.image_url, index)
        asset.resource_name  # "image_3.png"
    """

    def __init__(self, max_bytes: Optional[int] = None):
        self.max_bytes = max_bytes or MAX_ASSET_SIZE_MB * 1024 * 1024

    def embed(self, payload: str, index: int) -> EmbeddedAsset:
        """
        Decode one payload.

        Args:
            payload: data URI, e.g. "data:image/jpeg;base64,/9j/..."
            index: position of the owning record in the collection

        Returns:
            EmbeddedAsset named image_{index}.{extension}

        Raises:
            UnsupportedAsset: payload is not a decodable base64 image
        """
        match = DATA_URI_PATTERN.match(payload.strip()) if payload else None
        if match is None:
            raise UnsupportedAsset("not an inline base64 image payload", index)

        subtype = match.group("subtype").lower()
        media_type = IMAGE_MEDIA_TYPES.get(subtype)
        if media_type is None:
            raise UnsupportedAsset(f"image type {subtype!r} cannot be embedded", index)

        encoded = re.sub(r"\s+", "", match.group("data"))
        try:
            data = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            raise UnsupportedAsset(f"malformed base64 data ({e})", index)

        if not data:
            raise UnsupportedAsset("empty image data", index)
        if len(data) > self.max_bytes:
            raise UnsupportedAsset(
                f"image is {len(data) / (1024 * 1024):.1f} MB, limit is {self.max_bytes / (1024 * 1024):.1f} MB",
                index,
            )

        if media_type == "image/svg+xml":
            self._verify_svg(data, index)
        else:
            self._verify_raster(data, media_type, index)

        extension = IMAGE_EXTENSIONS.get(subtype, subtype)
        asset = EmbeddedAsset(
            index=index,
            resource_name=f"image_{index}.{extension}",
            media_type=media_type,
            data=data,
            source_uri=payload,
        )

        logger.debug(f"Embedded {asset.resource_name}: {media_type}, {len(data)} bytes")

        return asset

    def _verify_raster(self, data: bytes, media_type: str, index: int):
        """Make sure the bytes really are an image Pillow can read"""
        try:
            with Image.open(io.BytesIO(data)) as image:
                detected = image.format
                image.verify()
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as e:
            raise UnsupportedAsset(f"image data cannot be decoded ({e})", index)

        detected_type = PILLOW_FORMATS.get(detected or "")
        if detected_type is None:
            raise UnsupportedAsset(f"unsupported image format {detected!r}", index)
        if detected_type != media_type:
            logger.warning(
                f"Image for work #{index + 1} declared {media_type} but contains {detected_type}"
            )

    def _verify_svg(self, data: bytes, index: int):
        try:
            root = etree.fromstring(data, SVG_PARSER)
        except etree.XMLSyntaxError as e:
            raise UnsupportedAsset(f"SVG is not well-formed ({e})", index)

        if etree.QName(root).localname != "svg":
            raise UnsupportedAsset("SVG payload has no <svg> root", index)
