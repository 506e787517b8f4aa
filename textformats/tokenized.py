"""
Line-oriented text formats.

``tokenized-text`` expects one sentence per line with tokens separated by
single spaces. ``untokenized-text`` turns every code point of a line into a
token. Both write sentences back as space-separated tokens, each optionally
suffixed with ``_tag`` and ``_head``.
"""

from __future__ import annotations

from typing import IO, List, Optional, Tuple

from .config import FormatOptions
from .doc import Sentence, Token, byte_length
from .doc_utils import finish_sentence, join_words
from .records import LINE, read_record


def tokenize_on_spaces(text: str) -> Tuple[List[Token], str]:
    return join_words(word for word in text.split(" ") if word)


def tokenize_characters(text: str) -> Sentence:
    sentence = Sentence(text=text)
    start = 0
    for char in text:
        size = byte_length(char)
        sentence.add_token(char, start, start + size - 1)
        start += size
    return sentence


def parse_tokenized(docid: str, text: str) -> Optional[Sentence]:
    tokens, joined = tokenize_on_spaces(text)
    return finish_sentence(docid, tokens, joined)


def serialize_tokenized(sentence: Sentence) -> Tuple[str, str]:
    parts = []
    for token in sentence.tokens:
        value = token.word
        if token.tag is not None:
            value += f"_{token.tag}"
        if token.head is not None:
            value += f"_{token.head}"
        parts.append(value)
    return sentence.docid, " ".join(parts) + "\n"


class LineTextFormat:
    """Shared record handling and writer for one-sentence-per-line formats."""

    name = ""
    record_mode = LINE

    def __init__(self, options: Optional[FormatOptions] = None):
        self.options = options or FormatOptions()

    def read_record(self, stream: IO) -> Tuple[str, bool]:
        return read_record(stream, self.record_mode)

    def parse(self, docid: str, record: str) -> Optional[Sentence]:
        raise NotImplementedError

    def serialize(self, sentence: Sentence) -> Tuple[str, str]:
        return serialize_tokenized(sentence)


class TokenizedTextFormat(LineTextFormat):
    """Reader for whitespace-tokenized text, one sentence per line."""

    name = "tokenized-text"

    def parse(self, docid: str, record: str) -> Optional[Sentence]:
        return parse_tokenized(docid, record)


class UntokenizedTextFormat(LineTextFormat):
    """Reader for raw text where every UTF-8 character becomes a token."""

    name = "untokenized-text"

    def parse(self, docid: str, record: str) -> Optional[Sentence]:
        chars = tokenize_characters(record)
        return finish_sentence(docid, chars.tokens, record, note_text=record)
