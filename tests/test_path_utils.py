"""Tests for path_utils.py."""

from path_utils import (
    extract_media,
    get_media_hash,
    get_name,
    get_parent,
    get_parent_hierarchy,
    is_media,
    is_video_url,
)


class TestGetParent:
    """Tests for get_parent()."""

    def test_nested_path(self):
        assert get_parent("/content/screens/channel") == "/content/screens"

    def test_top_level_path(self):
        assert get_parent("/page") == ""

    def test_no_separator(self):
        assert get_parent("page") == ""


class TestGetName:
    """Tests for get_name()."""

    def test_nested_path(self):
        assert get_name("/content/screens/channel") == "channel"

    def test_no_separator(self):
        assert get_name("page") == "page"

    def test_trailing_slash(self):
        assert get_name("/content/") == ""


class TestGetParentHierarchy:
    """Tests for get_parent_hierarchy()."""

    def test_stops_at_content_root(self):
        """Ancestors above /content are not included."""
        result = get_parent_hierarchy("/content/screens/emea/channel")

        assert result == [
            {"title": "screens", "path": "/content/screens"},
            {"title": "emea", "path": "/content/screens/emea"},
        ]

    def test_stops_at_empty_path(self):
        result = get_parent_hierarchy("/site/section/page")

        assert result == [
            {"title": "site", "path": "/site"},
            {"title": "section", "path": "/site/section"},
        ]

    def test_top_level_page_has_no_ancestors(self):
        assert get_parent_hierarchy("/page") == []
        assert get_parent_hierarchy("/content/page") == []


class TestMediaHelpers:
    """Tests for is_media(), get_media_hash() and extract_media()."""

    def test_is_media(self):
        assert is_media("/media_1234abcd.png") is True
        assert is_media("  /site/media_1234abcd.jpeg ") is True

    def test_is_not_media(self):
        assert is_media("/scripts/app.js") is False
        assert is_media("/images/media.png") is False

    def test_get_media_hash(self):
        assert get_media_hash("/media_1234abcd.png") == "1234abcd"
        assert get_media_hash(" /media_1234abcd.png?width=200 ") == "1234abcd"

    def test_get_media_hash_with_route_prefix(self):
        """Dots before the media prefix do not cut the hash short."""
        assert get_media_hash("/v1.2/media_99ff.webp") == "99ff"

    def test_get_media_hash_without_extension(self):
        assert get_media_hash("/media_99ff") == "99ff"

    def test_extract_media(self):
        assert extract_media("/content/fragments/media_1234.png") == "/media_1234.png"
        assert extract_media(" /media_1234.png ") == "/media_1234.png"


class TestIsVideoUrl:
    """Tests for is_video_url()."""

    def test_video_url(self):
        assert is_video_url(" https://cdn.example.com/videos/intro.mp4") is True

    def test_non_video_url(self):
        assert is_video_url("https://cdn.example.com/media_1234.mp4") is False
