"""Tests for filename sanitization and storage key derivation."""

import re

import pytest

from modules.uploads.keys import (
    FALLBACK_FILENAME,
    DEFAULT_CONTENT_TYPE,
    sanitize_filename,
    resolve_content_type,
    derive_storage_key,
)


class TestSanitizeFilename:
    def test_plain_name_unchanged(self):
        """A bare filename should pass through."""
        assert sanitize_filename("song.mp3") == "song.mp3"

    @pytest.mark.parametrize(
        "filename,expected",
        [
            ("../../etc/passwd", "passwd"),
            ("/abs/path/track.wav", "track.wav"),
            ("dir/sub/track.wav", "track.wav"),
            ("..\\..\\windows\\track.wav", "track.wav"),
            ("a/../b/../clip.ogg", "clip.ogg"),
        ],
    )
    def test_directory_components_removed(self, filename, expected):
        """Path components and traversal sequences should be dropped."""
        assert sanitize_filename(filename) == expected

    @pytest.mark.parametrize("filename", [None, "", "   ", ".", "..", "/", "../", "\\"])
    def test_empty_or_root_like_falls_back(self, filename):
        """Names with no usable base should use the fallback."""
        assert sanitize_filename(filename) == FALLBACK_FILENAME

    def test_nul_bytes_removed(self):
        """NUL bytes should not reach the storage key."""
        assert sanitize_filename("evil\x00.mp3") == "evil.mp3"


class TestResolveContentType:
    def test_declared_type_is_trusted(self):
        """The declared type should be used as-is."""
        assert resolve_content_type("audio/mpeg") == "audio/mpeg"

    @pytest.mark.parametrize("declared", [None, "", "  "])
    def test_missing_type_defaults(self, declared):
        """A missing type should default to binary."""
        assert resolve_content_type(declared) == DEFAULT_CONTENT_TYPE


class TestDeriveStorageKey:
    def test_key_format(self):
        """Key should be owner/nanoseconds/base+ext."""
        key = derive_storage_key("user-1", "song.mp3", clock_ns=lambda: 1700000000123456789)
        assert key == "user-1/1700000000123456789/song.mp3"

    def test_base_lowercased_and_spaces_replaced(self):
        """The base is lowercased and spaces become underscores; the extension is kept."""
        key = derive_storage_key("user-1", "My Song Name.MP3", clock_ns=lambda: 42)
        assert key == "user-1/42/my_song_name.MP3"

    def test_fallback_has_no_extension(self):
        """The fallback filename should be used verbatim."""
        key = derive_storage_key("user-1", FALLBACK_FILENAME, clock_ns=lambda: 42)
        assert key == "user-1/42/uploaded_file"

    def test_default_clock_is_nanoseconds(self):
        """Without an injected clock the middle segment is a nanosecond timestamp."""
        key = derive_storage_key("user-1", "a.wav")
        assert re.fullmatch(r"user-1/\d{19}/a\.wav", key)

    def test_key_stays_under_owner_prefix(self):
        """A sanitized hostile name cannot escape the owner's prefix."""
        key = derive_storage_key("user-1", sanitize_filename("../../user-2/x.mp3"), clock_ns=lambda: 1)
        assert key == "user-1/1/x.mp3"
