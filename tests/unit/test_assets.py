"""
Unit Tests for the Asset Embedder

Decoding inline image payloads into named archive resources.
"""

import base64

import pytest

from inkverse.contracts import UnsupportedAsset
from inkverse.epub.assets import AssetEmbedder, EmbeddedAsset


SVG = b'<svg xmlns="http://www.w3.org/2000/svg" width="10" height="10"><rect width="10" height="10"/></svg>'


def svg_uri(data: bytes = SVG) -> str:
    return "data:image/svg+xml;base64," + base64.b64encode(data).decode("ascii")


@pytest.fixture
def embedder():
    return AssetEmbedder()


class TestEmbedding:
    """Test successful embedding."""

    def test_png(self, embedder, png_uri):
        asset = embedder.embed(png_uri, 0)
        assert isinstance(asset, EmbeddedAsset)
        assert asset.resource_name == "image_0.png"
        assert asset.media_type == "image/png"
        assert asset.data.startswith(b"\x89PNG")
        assert asset.manifest_id == "img_0"
        assert asset.href == "images/image_0.png"
        assert asset.source_uri == png_uri

    def test_jpg_subtype_maps_to_jpeg_media_type(self, embedder, jpeg_uri):
        asset = embedder.embed(jpeg_uri, 3)
        assert asset.resource_name == "image_3.jpg"
        assert asset.media_type == "image/jpeg"

    def test_gif_and_webp(self, embedder, image_uri):
        assert embedder.embed(image_uri("GIF", "gif"), 1).media_type == "image/gif"
        assert embedder.embed(image_uri("WEBP", "webp"), 2).media_type == "image/webp"

    def test_svg(self, embedder):
        asset = embedder.embed(svg_uri(), 4)
        assert asset.resource_name == "image_4.svg"
        assert asset.media_type == "image/svg+xml"

    def test_uppercase_subtype(self, embedder, image_uri):
        payload = image_uri("PNG", "PNG")
        assert embedder.embed(payload, 0).media_type == "image/png"

    def test_whitespace_in_base64_is_ignored(self, embedder, png_uri):
        header, data = png_uri.split(",", 1)
        wrapped = header + "," + "\n".join(data[i:i + 20] for i in range(0, len(data), 20))
        assert embedder.embed(wrapped, 0).data == embedder.embed(png_uri, 0).data

    def test_declared_type_mismatch_still_embeds(self, embedder, image_uri):
        # PNG bytes declared as JPEG: logged, packed under the declared type
        payload = image_uri("PNG", "jpeg")
        asset = embedder.embed(payload, 0)
        assert asset.media_type == "image/jpeg"


class TestRejection:
    """Test payloads that abort the export."""

    def test_not_a_data_uri(self, embedder):
        with pytest.raises(UnsupportedAsset) as exc_info:
            embedder.embed("https://example.com/image.png", 5)
        assert exc_info.value.index == 5

    def test_missing_payload(self, embedder):
        with pytest.raises(UnsupportedAsset):
            embedder.embed("", 0)

    def test_unknown_subtype(self, embedder):
        with pytest.raises(UnsupportedAsset) as exc_info:
            embedder.embed("data:image/tiff;base64,AAAA", 0)
        assert "tiff" in exc_info.value.reason

    def test_malformed_base64(self, embedder):
        with pytest.raises(UnsupportedAsset) as exc_info:
            embedder.embed("data:image/png;base64,@@@not-base64@@@", 1)
        assert exc_info.value.index == 1

    def test_empty_data(self, embedder):
        with pytest.raises(UnsupportedAsset):
            embedder.embed("data:image/png;base64,", 0)

    def test_bytes_that_are_not_an_image(self, embedder):
        payload = "data:image/png;base64," + base64.b64encode(b"definitely not a png").decode("ascii")
        with pytest.raises(UnsupportedAsset):
            embedder.embed(payload, 0)

    def test_oversize(self, png_uri):
        embedder = AssetEmbedder(max_bytes=10)
        with pytest.raises(UnsupportedAsset) as exc_info:
            embedder.embed(png_uri, 0)
        assert "limit" in exc_info.value.reason

    def test_malformed_svg(self, embedder):
        with pytest.raises(UnsupportedAsset):
            embedder.embed(svg_uri(b"<svg><rect></svg>"), 0)

    def test_svg_without_svg_root(self, embedder):
        with pytest.raises(UnsupportedAsset):
            embedder.embed(svg_uri(b"<html/>"), 0)
