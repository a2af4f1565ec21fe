import re

import pytest

from docchat.index_processor.splitter import PARAGRAPH_BREAK, ParagraphSentenceSplitter, segment
from tests.utils.assertions import assert_chunk_sizes


def _non_whitespace(text: str) -> str:
    return re.sub(r"\s+", "", text)


def test_splitter_initialization():
    splitter = ParagraphSentenceSplitter(max_chunk_size=500)
    assert splitter.max_chunk_size == 500


def test_invalid_max_chunk_size():
    with pytest.raises(ValueError, match="max_chunk_size"):
        ParagraphSentenceSplitter(max_chunk_size=0)


@pytest.mark.parametrize("text", [None, "", "   ", "\n\n \n"])
def test_empty_input_yields_no_chunks(text):
    assert segment(text, 100) == []


def test_short_text_is_one_chunk():
    assert segment("Just one sentence.", 100) == ["Just one sentence."]


def test_sentences_packed_greedily():
    text = "One two three. Four five six. Seven eight nine."
    assert segment(text, 30) == ["One two three. Four five six.", "Seven eight nine."]


def test_sentence_terminators():
    text = "Is it? Yes! It is."
    assert segment(text, 8) == ["Is it?", "Yes!", "It is."]


def test_paragraph_break_kept_when_it_fits():
    text = "First para.\n\nSecond para."
    assert segment(text, 1000) == [f"First para.{PARAGRAPH_BREAK}Second para."]


def test_paragraph_break_flushes_when_it_does_not_fit():
    text = "First para.\n\nSecond para."
    assert segment(text, 12) == ["First para.", "Second para."]


def test_blank_lines_with_spaces_split_paragraphs():
    text = "First para.\n   \nSecond para."
    assert segment(text, 12) == ["First para.", "Second para."]


def test_empty_paragraphs_discarded():
    text = "\n\nFirst para.\n\n\n\n\n\nSecond para.\n\n"
    assert segment(text, 12) == ["First para.", "Second para."]


def test_oversized_sentence_split_on_words():
    assert segment("aaaa bbbb cccc dddd.", 10) == ["aaaa bbbb", "cccc dddd."]


def test_oversized_sentence_flushes_buffer_first():
    text = "Short one. aaaa bbbb cccc dddd eeee."
    assert segment(text, 15) == ["Short one.", "aaaa bbbb cccc", "dddd eeee."]


def test_long_word_kept_intact():
    chunks = segment("tiny abcdefghijklmnop end.", 5)
    assert chunks == ["tiny", "abcdefghijklmnop", "end."]


def test_content_preserved_in_order():
    paragraphs = [
        "Embeddings map text to vectors. Similar texts land close together! Do they always? Mostly.",
        "Chunks are bounded in size. They never overlap.",
        "A supercalifragilisticexpialidocious word appears here. The end.",
    ]
    text = "\n\n".join(paragraphs)

    for size in (1, 10, 25, 60, 200, 10_000):
        chunks = segment(text, size)
        assert _non_whitespace("".join(chunks)) == _non_whitespace(text)
        assert_chunk_sizes(chunks, size)


def test_deterministic():
    text = "Alpha beta. Gamma delta.\n\nEpsilon zeta eta theta."
    assert segment(text, 20) == segment(text, 20)


def test_two_minimal_chunks_not_split_further():
    first, second = segment("Chunk number one. Chunk number two.", 20)
    assert len(segment(f"{first} {second}", 1000)) <= 2


def test_three_paragraph_document():
    sentence = "x" * 199 + "."
    paragraphs = [" ".join([sentence.replace("x", letter, 5)] * 4) for letter in "abc"]
    text = "\n\n".join(paragraphs)

    chunks = segment(text, 1000)

    assert chunks == paragraphs
    assert "\n\n".join(chunks) == text
