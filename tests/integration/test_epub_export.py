#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
End-to-end export tests.

Runs the full PublicationExporter pipeline and reads the results back:
- archive structure is stable across exports, identifiers are not
- the packed EPUB opens in a standard EPUB library
- failed exports leave no file behind
"""

import io
import json
import zipfile
from datetime import datetime, timezone

import ebooklib
from ebooklib import epub
from lxml import etree
import pytest

from inkverse.cli import main
from inkverse.contracts import ContractValidationError, PoemCollection, PoemRecord, UnsupportedAsset
from inkverse.exporter import PublicationExporter


OPF_NS = {"opf": "http://www.idpf.org/2007/opf", "dc": "http://purl.org/dc/elements/1.1/"}
NOW = datetime(2024, 3, 1, 10, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def exporter(test_settings):
    return PublicationExporter(test_settings)


def opf_structure(data: bytes):
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        opf = etree.fromstring(zf.read("OEBPS/content.opf"))
        names = zf.namelist()
    manifest = [
        (item.get("id"), item.get("href"), item.get("media-type"))
        for item in opf.xpath("//opf:manifest/opf:item", namespaces=OPF_NS)
    ]
    spine = opf.xpath("//opf:spine/opf:itemref/@idref", namespaces=OPF_NS)
    identifier = opf.xpath("//dc:identifier/text()", namespaces=OPF_NS)[0]
    return manifest, spine, names, identifier


class TestEpubExport:
    """Test the in-memory EPUB export."""

    def test_result(self, exporter, sample_collection):
        result = exporter.export_epub(sample_collection, NOW)
        assert result.filename == "墨韵诗集_2024-03-01.epub"
        assert result.size == len(result.data) > 0
        assert result.identifier.startswith("urn:uuid:")
        assert [doc.record_id for doc in result.documents] == ["p1", "p2", "p3"]

    def test_two_exports_same_structure_new_identifier(self, exporter, sample_collection):
        first = opf_structure(exporter.export_epub(sample_collection, NOW).data)
        second = opf_structure(exporter.export_epub(sample_collection, NOW).data)
        assert first[0] == second[0]
        assert first[1] == second[1]
        assert first[2] == second[2]
        assert first[3] != second[3]

    def test_quiet_night_document(self, exporter, quiet_night):
        result = exporter.export_epub(PoemCollection([quiet_night]), NOW)
        with zipfile.ZipFile(io.BytesIO(result.data)) as zf:
            markup = zf.read("OEBPS/poem_0.xhtml").decode("utf-8")
            assert markup.count("<br/>") == 4
            assert not [name for name in zf.namelist() if name.startswith("OEBPS/images/")]

    def test_empty_collection(self, exporter, empty_collection):
        manifest, spine, names, _ = opf_structure(exporter.export_epub(empty_collection, NOW).data)
        assert spine == ["cover", "toc"]
        assert "OEBPS/toc.xhtml" in names

    def test_invalid_collection_rejected(self, exporter):
        collection = PoemCollection([PoemRecord(id="a"), PoemRecord(id="a")])
        with pytest.raises(ContractValidationError):
            exporter.export_epub(collection, NOW)

    def test_control_characters_in_text(self, exporter):
        record = PoemRecord(id="a", title="\x0b题\x07", content="line one\x0cline two\nthree")
        result = exporter.export_epub(PoemCollection([record]), NOW)
        with zipfile.ZipFile(io.BytesIO(result.data)) as zf:
            poem = etree.fromstring(zf.read("OEBPS/poem_0.xhtml"))
            nav = etree.fromstring(zf.read("OEBPS/toc.xhtml"))
            ncx = etree.fromstring(zf.read("OEBPS/toc.ncx"))
        text = "".join(poem.itertext())
        assert "line oneline two" in text
        assert "three" in text
        assert "题" in "".join(nav.itertext())
        assert "题" in "".join(ncx.itertext())

    def test_unpaired_surrogate_rejected(self, exporter):
        collection = PoemCollection.from_json('[{"id": "a", "title": "t", "content": "ab\\ud800c"}]')
        with pytest.raises(ContractValidationError):
            exporter.export_epub(collection, NOW)

    def test_unsupported_asset_aborts(self, exporter, quiet_night):
        bad = PoemRecord(id="bad", content="x", image_url="data:image/bmp;base64,Qk0=")
        with pytest.raises(UnsupportedAsset) as exc_info:
            exporter.export_epub(PoemCollection([quiet_night, bad]), NOW)
        assert exc_info.value.index == 1


class TestEpubReadBack:
    """Test that a standard EPUB reader accepts the archive."""

    def test_ebooklib_reads_archive(self, exporter, sample_collection, temp_dir):
        path = exporter.write_epub(sample_collection, temp_dir, NOW)
        book = epub.read_epub(str(path), {"ignore_ncx": True})

        titles = book.get_metadata("DC", "title")
        assert titles[0][0] == "墨韵诗集"
        assert book.get_metadata("DC", "language")[0][0] == "zh-CN"

        documents = [item.get_name() for item in book.get_items_of_type(ebooklib.ITEM_DOCUMENT)]
        for name in ("poem_0.xhtml", "poem_1.xhtml", "poem_2.xhtml", "cover.xhtml"):
            assert name in documents

        images = list(book.get_items_of_type(ebooklib.ITEM_IMAGE))
        assert [image.get_name() for image in images] == ["images/image_2.png"]
        assert images[0].get_content().startswith(b"\x89PNG")

        spine_ids = [idref for idref, _ in book.spine]
        assert spine_ids == ["cover", "toc", "poem_0", "poem_1", "poem_2"]


class TestWriteEpub:
    """Test file output."""

    def test_writes_into_output_dir(self, exporter, sample_collection, temp_dir):
        path = exporter.write_epub(sample_collection, temp_dir / "out", NOW)
        assert path.exists()
        assert path.parent == temp_dir / "out"
        assert path.name == "墨韵诗集_2024-03-01.epub"
        assert list(path.parent.iterdir()) == [path]

    def test_default_output_dir(self, exporter, test_settings, sample_collection):
        path = exporter.write_epub(sample_collection, now=NOW)
        assert path.parent == test_settings.output_dir

    def test_failed_export_leaves_nothing(self, exporter, temp_dir):
        bad = PoemCollection([PoemRecord(id="bad", image_url="data:image/png;base64,????")])
        output = temp_dir / "out"
        with pytest.raises(UnsupportedAsset):
            exporter.write_epub(bad, output, NOW)
        assert not output.exists() or list(output.iterdir()) == []

    def test_unsafe_title_characters(self, test_settings, empty_collection, temp_dir):
        settings = test_settings.model_copy(update={"book_title": "A/B: C"})
        path = PublicationExporter(settings).write_epub(empty_collection, temp_dir, NOW)
        assert path.name == "A_B_ C_2024-03-01.epub"


class TestOtherTargets:
    """Test print and HTML exports through the exporter."""

    def test_print_html(self, exporter, sample_collection):
        html_text = exporter.export_print_html(sample_collection, NOW)
        assert html_text.count('class="page-break ') == 5
        assert "poem-long" in html_text

    def test_html_book(self, exporter, sample_collection):
        html_text = exporter.export_html(sample_collection, NOW)
        assert 'href="#poem-p3"' in html_text


class TestCli:
    """Test the inkverse-export entry point."""

    @pytest.fixture
    def poems_json(self, sample_collection, temp_dir):
        path = temp_dir / "poems.json"
        path.write_text(sample_collection.to_json(), encoding="utf-8")
        return path

    def test_epub(self, poems_json, temp_dir):
        assert main(["epub", str(poems_json), "--output", str(temp_dir / "books")]) == 0
        written = list((temp_dir / "books").glob("*.epub"))
        assert len(written) == 1

    def test_print_and_html(self, poems_json, temp_dir):
        assert main(["print", str(poems_json), "-o", str(temp_dir / "print.html"), "--page-size", "A5"]) == 0
        assert "size: A5" in (temp_dir / "print.html").read_text(encoding="utf-8")
        assert main(["html", str(poems_json), "-o", str(temp_dir / "book.html")]) == 0
        assert (temp_dir / "book.html").exists()

    def test_missing_input(self, temp_dir):
        assert main(["epub", str(temp_dir / "missing.json")]) == 1

    def test_export_failure_exit_code(self, temp_dir):
        path = temp_dir / "poems.json"
        path.write_text(json.dumps([{"id": "a"}, {"id": "a"}]), encoding="utf-8")
        assert main(["epub", str(path), "-o", str(temp_dir)]) == 2

    def test_unpaired_surrogate_exit_code(self, temp_dir):
        path = temp_dir / "poems.json"
        path.write_text('[{"id": "a", "content": "ab\\ud800c"}]', encoding="utf-8")
        assert main(["epub", str(path), "-o", str(temp_dir / "books")]) == 2
        assert not (temp_dir / "books").exists() or not list((temp_dir / "books").iterdir())

    def test_no_command(self):
        assert main([]) == 1
