"""
Unit Tests for the Package Assembler

Manifest, spine, navigation, NCX and metadata of one export.
"""

from datetime import datetime, timedelta, timezone

from lxml import etree
import pytest

from inkverse.contracts import PackagingInvariantViolation
from inkverse.epub.package import PackageAssembler, PackageMetadata
from inkverse.layout.classifier import LayoutClassifier
from inkverse.layout.renderer import ContentDocumentRenderer, RenderTarget


OPF_NS = {"opf": "http://www.idpf.org/2007/opf", "dc": "http://purl.org/dc/elements/1.1/"}
XHTML_NS = {"x": "http://www.w3.org/1999/xhtml"}
NCX_NS = {"ncx": "http://www.daisy.org/z3986/2005/ncx/"}

FIXED_NOW = datetime(2024, 3, 1, 9, 30, 15, tzinfo=timezone(timedelta(hours=8)))


def render_archive(collection):
    renderer = ContentDocumentRenderer()
    classifier = LayoutClassifier()
    documents = [
        renderer.render(record, classifier.classify(record.content), RenderTarget.ARCHIVE, index)
        for index, record in enumerate(collection)
    ]
    assets = [document.asset for document in documents if document.asset is not None]
    return documents, assets


@pytest.fixture
def assembler():
    return PackageAssembler(title="墨韵诗集", subtitle="Ink & Verse", language="zh-CN")


@pytest.fixture
def package(assembler, sample_collection):
    documents, assets = render_archive(sample_collection)
    return assembler.assemble(sample_collection.records, documents, assets, FIXED_NOW)


class TestMetadata:
    """Test publication metadata."""

    def test_generate(self):
        meta = PackageMetadata.generate("T", "C", "zh-CN", FIXED_NOW)
        assert meta.identifier.startswith("urn:uuid:")
        assert meta.modified == "2024-03-01T01:30:15Z"
        assert meta.date == "2024-03-01"

    def test_fresh_identifier_each_time(self):
        first = PackageMetadata.generate("T", "C", "zh-CN", FIXED_NOW)
        second = PackageMetadata.generate("T", "C", "zh-CN", FIXED_NOW)
        assert first.identifier != second.identifier


class TestOrdering:
    """Test collection order in every listing."""

    def test_spine_order(self, package):
        assert package.spine == ["cover", "toc", "poem_0", "poem_1", "poem_2"]

    def test_navigation_order(self, package):
        assert [point.title for point in package.works] == ["静夜思", "长歌", "Untitled"]
        assert [point.href for point in package.works] == ["poem_0.xhtml", "poem_1.xhtml", "poem_2.xhtml"]

    def test_nav_document_order(self, package):
        root = etree.fromstring(package.resources["toc.xhtml"].encode("utf-8"))
        links = root.xpath('//x:nav[@id="toc"]/x:ol/x:li/x:a/@href', namespaces=XHTML_NS)
        assert links == ["poem_0.xhtml", "poem_1.xhtml", "poem_2.xhtml"]

    def test_ncx_order(self, package):
        root = etree.fromstring(package.resources["toc.ncx"].encode("utf-8"))
        sources = root.xpath("//ncx:navPoint/ncx:content/@src", namespaces=NCX_NS)
        assert sources == ["cover.xhtml", "poem_0.xhtml", "poem_1.xhtml", "poem_2.xhtml"]
        orders = root.xpath("//ncx:navPoint/@playOrder", namespaces=NCX_NS)
        assert orders == ["1", "2", "3", "4"]


class TestManifest:
    """Test manifest entries."""

    def test_unique_ids_and_hrefs(self, package):
        ids = [item.id for item in package.manifest]
        hrefs = [item.href for item in package.manifest]
        assert len(ids) == len(set(ids))
        assert len(hrefs) == len(set(hrefs))

    def test_one_image_item_with_matching_type(self, package):
        images = [item for item in package.manifest if item.media_type.startswith("image/")]
        assert len(images) == 1
        assert images[0].id == "img_2"
        assert images[0].href == "images/image_2.png"
        assert images[0].media_type == "image/png"

    def test_nav_property(self, package):
        nav = [item for item in package.manifest if item.properties == "nav"]
        assert [item.href for item in nav] == ["toc.xhtml"]

    def test_package_document(self, package):
        root = etree.fromstring(package.package_document().encode("utf-8"))
        assert root.get("unique-identifier") == "BookId"
        identifier = root.xpath("//dc:identifier/text()", namespaces=OPF_NS)[0]
        assert identifier == package.metadata.identifier
        modified = root.xpath('//opf:meta[@property="dcterms:modified"]/text()', namespaces=OPF_NS)
        assert modified == ["2024-03-01T01:30:15Z"]
        assert root.xpath("//opf:spine/@toc", namespaces=OPF_NS) == ["ncx"]
        idrefs = root.xpath("//opf:itemref/@idref", namespaces=OPF_NS)
        assert idrefs == package.spine

    def test_cover_shows_title_subtitle_date(self, package):
        cover = package.resources["cover.xhtml"]
        assert "墨韵诗集" in cover
        assert "Ink &amp; Verse" in cover
        assert "2024-03-01" in cover


class TestEdgeCases:
    """Test empty collections and misaligned inputs."""

    def test_empty_collection(self, assembler, empty_collection):
        package = assembler.assemble(empty_collection.records, [], [], FIXED_NOW)
        assert package.spine == ["cover", "toc"]
        assert package.works == []
        etree.fromstring(package.resources["toc.xhtml"].encode("utf-8"))
        ncx = etree.fromstring(package.resources["toc.ncx"].encode("utf-8"))
        assert len(ncx.xpath("//ncx:navPoint", namespaces=NCX_NS)) == 1

    def test_no_image_means_no_image_item(self, assembler, quiet_night):
        documents, assets = render_archive([quiet_night])
        package = assembler.assemble([quiet_night], documents, assets, FIXED_NOW)
        assert not [item for item in package.manifest if item.media_type.startswith("image/")]

    def test_document_count_mismatch(self, assembler, sample_collection):
        documents, assets = render_archive(sample_collection)
        with pytest.raises(PackagingInvariantViolation):
            assembler.assemble(sample_collection.records, documents[:2], [], FIXED_NOW)

    def test_documents_out_of_order(self, assembler, sample_collection):
        documents, assets = render_archive(sample_collection)
        with pytest.raises(PackagingInvariantViolation):
            assembler.assemble(sample_collection.records, list(reversed(documents)), assets, FIXED_NOW)

    def test_asset_not_packed(self, assembler, sample_collection):
        documents, _ = render_archive(sample_collection)
        with pytest.raises(PackagingInvariantViolation) as exc_info:
            assembler.assemble(sample_collection.records, documents, [], FIXED_NOW)
        assert any("not being packed" in problem for problem in exc_info.value.problems)
