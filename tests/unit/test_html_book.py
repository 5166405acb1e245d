"""
Unit Tests for the standalone HTML book
"""

from datetime import datetime

from lxml import html as lxml_html
import pytest

from config.settings import Settings
from inkverse.contracts import UnsupportedAsset, PoemCollection, PoemRecord
from inkverse.layout.renderer import HtmlBookRenderer, RenderTarget


NOW = datetime(2024, 3, 1, 12, 0, 0)


@pytest.fixture
def renderer():
    return HtmlBookRenderer()


@pytest.fixture
def book(renderer, sample_collection):
    return renderer.render(sample_collection, NOW)


class TestStructure:
    """Test cover, contents and sections."""

    def test_cover(self, book):
        tree = lxml_html.fromstring(book)
        cover = tree.get_element_by_id("top")
        text = cover.text_content()
        assert "墨韵诗集" in text
        assert "Ink & Verse" in text
        assert "收录诗歌 3 首" in text
        assert "2024-03-01" in text
        assert cover.xpath('.//a[@href="#toc"]')

    def test_toc_links_every_work_in_order(self, book):
        tree = lxml_html.fromstring(book)
        links = tree.xpath('//section[@id="toc"]//a[@class="toc-entry"]/@href')
        assert links == ["#poem-p1", "#poem-p2", "#poem-p3"]

    def test_toc_rows(self, book):
        tree = lxml_html.fromstring(book)
        rows = tree.xpath('//a[@class="toc-entry"]')
        assert rows[0].xpath('.//span[@class="toc-index"]/text()') == ["01"]
        assert "静夜思" in rows[0].text_content()
        assert "李白" in rows[0].text_content()
        assert "Anonymous" in rows[1].text_content()
        assert "Untitled" in rows[2].text_content()

    def test_every_anchor_exists(self, book):
        tree = lxml_html.fromstring(book)
        for href in tree.xpath('//a[@class="toc-entry"]/@href'):
            assert tree.get_element_by_id(href[1:]) is not None

    def test_sections_use_declared_orientation(self, book):
        tree = lxml_html.fromstring(book)
        long_section = tree.get_element_by_id("poem-p2")
        assert "orientation-vertical" in long_section.get("class")
        assert "theme-dark" in long_section.get("class")
        assert "orientation-horizontal" in tree.get_element_by_id("poem-p3").get("class")

    def test_images_stay_inline(self, book):
        assert 'src="data:image/png;base64,' in book

    def test_footer(self, book):
        assert '<footer class="site-footer">' in book
        assert "2024" in book

    def test_empty_collection(self, renderer):
        book = renderer.render(PoemCollection([]), NOW)
        assert "收录诗歌 0 首" in book
        assert 'class="toc-entry"' not in book


class TestBehaviour:
    """Test targets, settings and failures."""

    def test_supports_only_screen(self):
        assert HtmlBookRenderer.get_supported_targets() == [RenderTarget.SCREEN]

    def test_from_settings(self, sample_collection):
        settings = Settings(_env_file=None, book_title="Moonlight", anonymous_placeholder="佚名")
        book = HtmlBookRenderer.from_settings(settings).render(sample_collection, NOW)
        assert "<title>Moonlight - Ink &amp; Verse</title>" in book
        assert "佚名" in book

    def test_bad_image_aborts(self, renderer):
        collection = PoemCollection([PoemRecord(id="x", image_url="not-a-data-uri")])
        with pytest.raises(UnsupportedAsset):
            renderer.render(collection, NOW)
