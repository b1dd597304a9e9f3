"""
Test suite for the sentence-window chunker.

Covers determinism, overlap seeding, oversized sentences and the
minimum-length filter.

System role: Verification of chunk boundaries and content hashes
"""

import pytest

from draftmind.core.chunker import chunk_text, hash_text, split_sentences


class TestHashText:
    """Test suite for chunk content hashing."""

    def test_hash_should_be_sha256_hex(self) -> None:
        assert hash_text("abc") == (
            "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
        )

    def test_hash_should_differ_for_different_text(self) -> None:
        assert hash_text("Paris.") != hash_text("Paris!")


class TestSplitSentences:
    """Test suite for sentence splitting."""

    def test_should_split_on_terminal_punctuation(self) -> None:
        assert split_sentences("One. Two! Three? Four") == ["One.", "Two!", "Three?", "Four"]

    def test_should_not_split_without_whitespace(self) -> None:
        assert split_sentences("v1.2 is out") == ["v1.2 is out"]


class TestChunkText:
    """Test suite for chunk_text."""

    def test_empty_text_should_produce_no_chunks(self) -> None:
        assert chunk_text("") == []
        assert chunk_text("   \n ") == []

    def test_short_document_should_be_single_chunk(self, paris_text: str) -> None:
        chunks = chunk_text(paris_text)

        assert len(chunks) == 1
        assert chunks[0].text == paris_text
        assert chunks[0].hash == hash_text(paris_text)

    def test_chunking_should_be_deterministic(self, paris_text: str) -> None:
        text = " ".join([paris_text] * 20)

        first = [chunk.hash for chunk in chunk_text(text)]
        second = [chunk.hash for chunk in chunk_text(text)]

        assert first == second
        assert len(first) > 1

    def test_closed_chunk_should_seed_next_with_trailing_words(self) -> None:
        text = (
            "Alpha beta gamma delta epsilon. "
            "Zeta eta theta iota kappa. "
            "Lambda mu nu xi omicron."
        )

        chunks = chunk_text(text, chunk_size=40)

        assert [chunk.text for chunk in chunks] == [
            "Alpha beta gamma delta epsilon.",
            "epsilon. Zeta eta theta iota kappa.",
            "kappa. Lambda mu nu xi omicron.",
        ]

    def test_zero_overlap_should_not_carry_words(self) -> None:
        text = "Alpha beta gamma delta epsilon. Zeta eta theta iota kappa."

        chunks = chunk_text(text, chunk_size=40, overlap_ratio=0.0)

        assert [chunk.text for chunk in chunks] == [
            "Alpha beta gamma delta epsilon.",
            "Zeta eta theta iota kappa.",
        ]

    def test_oversized_sentence_should_be_kept_whole(self) -> None:
        sentence = "word " * 150 + "end."

        chunks = chunk_text(sentence.strip(), chunk_size=100)

        assert len(chunks) == 1
        assert chunks[0].text == sentence.strip()

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Hi. Ok.", 0),
            ("abcdefghijklmnopqrs.", 0),
            ("abcdefghijklmnopqrst.", 1),
        ],
    )
    def test_chunks_at_or_below_min_length_should_be_dropped(self, text: str, expected: int) -> None:
        assert len(chunk_text(text)) == expected

    def test_chunks_should_be_ordered_by_position(self) -> None:
        sentences = [f"Sentence number {i} talks about topic {i}." for i in range(30)]

        chunks = chunk_text(" ".join(sentences), chunk_size=120)

        assert chunks[0].text.startswith("Sentence number 0 ")
        assert chunks[-1].text.endswith("topic 29.")
