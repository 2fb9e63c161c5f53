"""
Tests for Chunker

Tests splitting submissions into model-sized chunks.
"""

import pytest

from app.services.chunker import DEFAULT_CHUNK_SIZE, split_into_chunks


class TestSplitIntoChunks:
    """Test suite for split_into_chunks."""

    @pytest.mark.parametrize("length,size", [(1, 1), (10, 3), (12000, 5000), (5000, 5000), (4999, 5000)])
    def test_chunks_reassemble_input(self, length, size):
        """Test that joined chunks give back the input and sizes are bounded."""
        text = "".join(chr(ord("a") + i % 26) for i in range(length))

        chunks = split_into_chunks(text, size)

        assert "".join(chunks) == text
        assert all(len(chunk) == size for chunk in chunks[:-1])
        assert 1 <= len(chunks[-1]) <= size

    def test_empty_input(self):
        """Test that empty text gives no chunks."""
        assert split_into_chunks("", 10) == []

    def test_twelve_thousand_characters(self):
        """Test the chunk lengths for a 12000-character input."""
        chunks = split_into_chunks("x" * 12000, 5000)

        assert [len(chunk) for chunk in chunks] == [5000, 5000, 2000]

    @pytest.mark.parametrize("size", [0, -1, -5000])
    def test_non_positive_size_rejected(self, size):
        """Test that a non-positive size is a precondition violation."""
        with pytest.raises(ValueError):
            split_into_chunks("some text", size)

    def test_idempotent(self):
        """Test that chunking twice gives the same sequence."""
        text = "function main() { return 1; }\n" * 500

        assert split_into_chunks(text, 777) == split_into_chunks(text, 777)

    def test_default_size(self):
        """Test the default chunk size."""
        chunks = split_into_chunks("y" * (DEFAULT_CHUNK_SIZE + 1))

        assert DEFAULT_CHUNK_SIZE == 5000
        assert [len(chunk) for chunk in chunks] == [5000, 1]

    def test_preserves_multibyte_characters(self):
        """Test that chunking works on characters, not bytes."""
        text = "ünïcødé✓" * 3

        chunks = split_into_chunks(text, 5)

        assert "".join(chunks) == text
        assert all(len(chunk) == 5 for chunk in chunks[:-1])
