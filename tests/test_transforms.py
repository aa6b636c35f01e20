"""Tests for Markdown transforms."""

import datetime

import pytest
import yaml

from avif_publisher.transforms.frontmatter import (
    build_front_matter,
    prepare_document,
    strip_title_heading,
    title_from_filename,
)
from avif_publisher.transforms.links import iter_image_references, rewrite_image_references

NOW = datetime.datetime(2024, 5, 6, 7, 8, 9)
CAT = "d41d8cd98f00b204e9800998ecf8427e.avif"


class TestIterImageReferences:
    """Tests for the reference scanner."""

    def test_single_reference(self):
        refs = list(iter_image_references("see ![cat](images/cat.jpg) here"))
        assert len(refs) == 1
        assert refs[0].alt == "cat"
        assert refs[0].path == "images/cat.jpg"
        assert refs[0].filename == "cat.jpg"

    def test_positions(self):
        text = "x ![a](b.png) y"
        ref = next(iter_image_references(text))
        assert text[ref.start:ref.end] == "![a](b.png)"

    def test_empty_alt(self):
        ref = next(iter_image_references("![](cat.jpg)"))
        assert ref.alt == ""

    def test_empty_path_not_matched(self):
        assert list(iter_image_references("![cat]()")) == []

    def test_plain_link_not_matched(self):
        assert list(iter_image_references("[cat](cat.jpg)")) == []

    def test_space_between_brackets_not_matched(self):
        assert list(iter_image_references("![cat] (cat.jpg)")) == []

    def test_failed_candidate_resumes_scan(self):
        refs = list(iter_image_references("![broken ![ok](ok.png)"))
        assert [(r.alt, r.path) for r in refs] == [("broken ![ok", "ok.png")]

    def test_unterminated(self):
        assert list(iter_image_references("![cat](cat.jpg")) == []

    def test_multiple_in_order(self):
        refs = list(iter_image_references("![a](1.png)![b](2.png)\n![c](3.png)"))
        assert [r.path for r in refs] == ["1.png", "2.png", "3.png"]


class TestRewriteImageReferences:
    """Tests for rewrite_image_references."""

    def test_rewrites_matching_reference(self):
        text, count = rewrite_image_references("![cat](images/cat.jpg)", {"cat.jpg": CAT})
        assert text == f"![cat](images/{CAT})"
        assert count == 1

    def test_empty_mapping_leaves_document_unchanged(self):
        doc = "intro\n![a](images/a.png) and ![](b.gif)\n![c](./x/c.jpg)\n"
        assert rewrite_image_references(doc, {}) == (doc, 0)

    def test_unmatched_left_verbatim(self):
        doc = "![a](images/a.png) ![b]( odd path.jpg )"
        text, count = rewrite_image_references(doc, {"a.png": "new.avif"})
        assert text == "![a](images/new.avif) ![b]( odd path.jpg )"
        assert count == 1

    def test_alt_text_preserved(self):
        text, _ = rewrite_image_references("![A *fancy* cat!](cat.jpg)", {"cat.jpg": CAT})
        assert text == f"![A *fancy* cat!](images/{CAT})"

    def test_empty_alt_preserved(self):
        text, _ = rewrite_image_references("![](cat.jpg)", {"cat.jpg": CAT})
        assert text == f"![](images/{CAT})"

    def test_repeated_path_rewritten_every_time(self):
        doc = "![one](images/cat.jpg)\n\n![two](./images/cat.jpg)"
        text, count = rewrite_image_references(doc, {"cat.jpg": CAT})
        assert text == f"![one](images/{CAT})\n\n![two](images/{CAT})"
        assert count == 2

    def test_unsupported_file_not_in_mapping(self):
        doc = "![notes](images/notes.txt)"
        assert rewrite_image_references(doc, {"cat.jpg": CAT})[0] == doc

    def test_surrounding_text_untouched(self):
        doc = "# Title\n\nBefore ![cat](cat.jpg) after [link](cat.jpg).\n"
        text, _ = rewrite_image_references(doc, {"cat.jpg": CAT})
        assert text == f"# Title\n\nBefore ![cat](images/{CAT}) after [link](cat.jpg).\n"

    def test_custom_images_dir(self):
        text, _ = rewrite_image_references("![cat](cat.jpg)", {"cat.jpg": CAT}, images_dir="assets/")
        assert text == f"![cat](assets/{CAT})"


class TestStripTitleHeading:
    """Tests for strip_title_heading."""

    def test_strips_level_one_heading(self):
        assert strip_title_heading("# Title\nBody\n") == "Body\n"

    def test_keeps_blank_line_after_heading(self):
        assert strip_title_heading("# Title\n\nBody") == "\nBody"

    def test_heading_only(self):
        assert strip_title_heading("# Title") == ""

    @pytest.mark.parametrize("first_line", ["## sub", "#no-space", " # indented", "Title"])
    def test_other_first_lines_kept(self, first_line):
        doc = f"{first_line}\nBody"
        assert strip_title_heading(doc) == doc

    def test_only_first_line_considered(self):
        doc = "Intro\n# Heading\n"
        assert strip_title_heading(doc) == doc


class TestFrontMatter:
    """Tests for front matter building."""

    def test_build_front_matter(self):
        assert build_front_matter("My Post", NOW) == (
            "---\n"
            "title: My Post\n"
            "date: 2024-05-06T07:08:09\n"
            "tags: [ ]\n"
            "---\n"
            "\n"
        )

    def test_front_matter_is_valid_yaml(self):
        block = build_front_matter("Notes: part 1", NOW)
        data = yaml.safe_load(block.split("---\n")[1])
        assert data["title"] == "Notes: part 1"
        assert data["tags"] == []

    def test_date_like_title_stays_a_string(self):
        block = build_front_matter("2024-01-01", NOW)
        data = yaml.safe_load(block.split("---\n")[1])
        assert data["title"] == "2024-01-01"

    def test_default_timestamp(self):
        block = build_front_matter("Post")
        date_line = block.splitlines()[2]
        stamp = date_line[len("date: "):]
        assert datetime.datetime.strptime(stamp, "%Y-%m-%dT%H:%M:%S")

    def test_title_from_filename(self):
        assert title_from_filename("My Post.md") == "My Post"
        assert title_from_filename("dir/notes.v2.md") == "notes.v2"

    def test_prepare_document(self):
        result = prepare_document("# Old Title\n\nBody text\n", "post.md", NOW)
        assert result == (
            "---\ntitle: post\ndate: 2024-05-06T07:08:09\ntags: [ ]\n---\n\n"
            "\nBody text\n"
        )

    def test_prepare_document_without_heading(self):
        result = prepare_document("## Section\nBody", "post.md", NOW)
        assert result.endswith("---\n\n## Section\nBody")
