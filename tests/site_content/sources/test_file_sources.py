"""Tests for the local and editor-managed file sources."""

from pathlib import Path

from src.site_content.sources.files import EditorFileSource, FileSystemSource, LocalFileSource


def test_local_source_lists_mdx_documents(data_dir):
    source = LocalFileSource(data_dir / "content")

    reviews = source.list_documents("reviews")

    assert [doc.slug for doc in reviews] == ["cam-x", "lens-y"]
    cam = reviews[0]
    assert cam.source == "local"
    assert cam.title == "Cam X"
    assert cam.external_id == "B001"
    assert cam.frontmatter["pros"] == ["Fast autofocus"]
    assert "compact mirrorless body" in cam.content


def test_missing_collection_directory_is_empty(tmp_path):
    source = LocalFileSource(tmp_path)

    assert source.list_documents("guides") == []
    assert source.get_document("guides", "anything") is None


def test_local_source_ignores_other_extensions(tmp_path):
    guides = tmp_path / "guides"
    guides.mkdir()
    (guides / "a.mdx").write_text("---\ntitle: A\n---\nbody", encoding="utf-8")
    (guides / "b.md").write_text("---\ntitle: B\n---\nbody", encoding="utf-8")
    (guides / "notes.txt").write_text("ignore me", encoding="utf-8")

    source = LocalFileSource(tmp_path)

    assert [doc.slug for doc in source.list_documents("guides")] == ["a"]
    assert source.get_document("guides", "b") is None


def test_malformed_file_is_skipped_not_fatal(tmp_path):
    reviews = tmp_path / "reviews"
    reviews.mkdir()
    (reviews / "good.mdx").write_text("---\ntitle: Good\ndate: 2024-01-01\n---\nok", encoding="utf-8")
    (reviews / "broken.mdx").write_text("---\ntitle: [oops\n---\nbody", encoding="utf-8")
    (reviews / "binary.mdx").write_bytes(b"\xff\xfe\x00bad")

    source = LocalFileSource(tmp_path)

    assert [doc.slug for doc in source.list_documents("reviews")] == ["good"]
    assert source.get_document("reviews", "broken") is None


def test_editor_source_prefers_md_over_mdx(tmp_path):
    guides = tmp_path / "guides"
    guides.mkdir()
    (guides / "dup.mdx").write_text("---\ntitle: From mdx\n---\n", encoding="utf-8")
    (guides / "dup.md").write_text("---\ntitle: From md\n---\n", encoding="utf-8")
    (guides / "only-mdx.mdx").write_text("---\ntitle: Only mdx\n---\n", encoding="utf-8")

    source = EditorFileSource(tmp_path)

    listed = {doc.slug: doc.title for doc in source.list_documents("guides")}
    assert listed == {"dup": "From md", "only-mdx": "Only mdx"}
    assert source.get_document("guides", "dup").title == "From md"
    assert source.get_document("guides", "only-mdx").source == "editor"


def test_get_document_reads_single_file(data_dir):
    source = LocalFileSource(data_dir / "content")

    guide = source.get_document("guides", "march-guide")

    assert guide.title == "Best Cameras for Travel"
    assert guide.tags == ["travel", "cameras"]
    assert guide.date == "2024-03-01"


def test_get_document_rejects_path_traversal(data_dir):
    source = LocalFileSource(data_dir / "content" / "guides")

    assert source.get_document("reviews", "../reviews/cam-x") is None
    assert source.get_document("reviews", "..") is None
    assert source.get_document("reviews", "") is None


def test_source_can_be_limited_to_collections(data_dir):
    source = FileSystemSource(
        data_dir / "content",
        extensions=(".mdx",),
        name="local",
        collections=("pages",),
    )

    assert source.list_documents("reviews") == []
    assert [doc.slug for doc in source.list_documents("pages")] == ["about"]


def test_documents_are_fresh_on_every_read(tmp_path):
    guides = tmp_path / "guides"
    guides.mkdir()
    path = guides / "g.mdx"
    path.write_text("---\ntitle: First\n---\n", encoding="utf-8")
    source = LocalFileSource(tmp_path)

    first = source.get_document("guides", "g")
    path.write_text("---\ntitle: Second\n---\n", encoding="utf-8")
    second = source.get_document("guides", "g")

    assert first.title == "First"
    assert second.title == "Second"
