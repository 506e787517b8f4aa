"""
CoNLL reader/writer for dependency annotated corpora.

Sentences are separated by a blank line and every token line has ten
tab-separated fields:

    ID  FORM  LEMMA  CPOSTAG  POSTAG  FEATS  HEAD  DEPREL  PHEAD  PDEPREL

Only ID has to hold a real value; ``_`` marks an unspecified field. LEMMA,
PHEAD and PDEPREL are ignored on read and written as ``_``. CoNLL-U files
are accepted too: multiword token ranges (``2-3``) are skipped and the last
two columns (DEPS/MISC) are ignored. Lines starting with ``#`` are collected
as comments.
"""

from __future__ import annotations

import logging
import re
from typing import IO, List, Optional, Tuple

from .config import FormatOptions
from .doc import Attribute, Sentence, Token
from .doc_utils import finish_sentence, join_words
from .records import BLOCK, read_record

logger = logging.getLogger(__name__)

MIN_FIELDS = 8
NUM_FIELDS = 10
CATEGORY_SEPARATOR = "++"
POS_ATTRIBUTE = "fPOS"
DEFAULT_ATTRIBUTE_VALUE = "on"

_MULTIWORD_RANGE = re.compile(r"[0-9]+-[0-9]+")
_INTEGER = re.compile(r"-?[0-9]+")


class ConllFormatError(ValueError):
    """Raised for CoNLL input that cannot be interpreted safely."""

    def __init__(self, message: str, *, line: str = "", line_number: Optional[int] = None):
        if line_number is not None:
            message = f"{message} (line {line_number}: {line!r})"
        super().__init__(message)
        self.line = line
        self.line_number = line_number


def _underscore_if_empty(value: Optional[str]) -> str:
    return value if value else "_"


def _parse_int(value: str, what: str, line: str, line_number: int) -> int:
    if not value:
        return 0
    if not _INTEGER.fullmatch(value):
        raise ConllFormatError(
            f"Invalid {what} '{value}': expected an integer",
            line=line,
            line_number=line_number,
        )
    return int(value)


def parse_attributes(attributes: str, word: str = "") -> List[Attribute]:
    """
    Parse a FEATS string of the form ``a1=v1|a2=v2`` or ``v1|v2``.

    Values without a name (``v1``) get the value ``on``. Entries with an empty
    value are dropped with a warning; an empty name is kept as-is.
    """
    result: List[Attribute] = []
    for piece in attributes.split("|"):
        if "=" in piece:
            name, value = piece.split("=", 1)
        else:
            name, value = piece, DEFAULT_ATTRIBUTE_VALUE
        if not value:
            logger.warning("Invalid attributes string: %s for token: %s", attributes, word)
            continue
        result.append(Attribute(name=name, value=value))
    return result


def format_attributes(attributes: List[Attribute]) -> str:
    if not attributes:
        return "_"
    parts = []
    for attribute in attributes:
        if attribute.value == DEFAULT_ATTRIBUTE_VALUE:
            parts.append(attribute.name)
        else:
            parts.append(f"{attribute.name}={attribute.value}")
    return "|".join(parts)


def join_category_to_pos(token: Token) -> None:
    token.tag = f"{token.category or ''}{CATEGORY_SEPARATOR}{token.tag or ''}"
    token.category = None


def split_category_from_pos(token: Token) -> None:
    tag = token.tag or ""
    pos = tag.find(CATEGORY_SEPARATOR)
    if pos >= 0:
        token.category = tag[:pos]
        token.tag = tag[pos + len(CATEGORY_SEPARATOR):]


def add_pos_as_attribute(token: Token) -> None:
    if token.tag:
        token.attributes.append(Attribute(name=POS_ATTRIBUTE, value=token.tag))


def remove_pos_from_attributes(token: Token) -> None:
    # Only a trailing fPOS entry is treated as the synthetic one.
    if token.attributes and token.attributes[-1].name == POS_ATTRIBUTE:
        token.attributes.pop()


class ConllFormat:
    """Reads and writes sentences in the CoNLL format."""

    name = "conll-sentence"
    record_mode = BLOCK

    def __init__(self, options: Optional[FormatOptions] = None):
        self.options = options or FormatOptions()

    def read_record(self, stream: IO) -> Tuple[str, bool]:
        return read_record(stream, self.record_mode)

    def encode_token(self, token: Token) -> None:
        if self.options.join_category_to_pos:
            join_category_to_pos(token)
        if self.options.add_pos_as_attribute:
            add_pos_as_attribute(token)

    def decode_token(self, token: Token) -> None:
        if self.options.join_category_to_pos:
            split_category_from_pos(token)
        if self.options.add_pos_as_attribute:
            remove_pos_from_attributes(token)

    def parse(self, docid: str, record: str) -> Optional[Sentence]:
        words: List[str] = []
        annotated: List[Token] = []
        comments: List[str] = []
        expected_id = 1

        for line_number, line in enumerate(record.split("\n"), start=1):
            if not line:
                continue
            fields = line.split("\t")

            if fields[0].startswith("#"):
                comments.append(fields[0] + "\n")
                continue

            if _MULTIWORD_RANGE.fullmatch(fields[0]):
                continue

            for j in range(2, len(fields)):
                if fields[j] == "_":
                    fields[j] = ""

            if len(fields) < MIN_FIELDS:
                raise ConllFormatError(
                    f"Every line has to have at least {MIN_FIELDS} tab separated fields",
                    line=line,
                    line_number=line_number,
                )

            token_id = _parse_int(fields[0], "token id", line, line_number)
            if token_id != expected_id:
                raise ConllFormatError(
                    f"Expected token id {expected_id}, got {fields[0]!r}. Token ids start at 1 "
                    "for each new sentence and increase by 1 on each new token. "
                    "Sentences are separated by an empty line",
                    line=line,
                    line_number=line_number,
                )
            expected_id += 1

            word = fields[1]
            head = _parse_int(fields[6], "head", line, line_number)
            token = Token(
                word=word,
                category=fields[3] or None,
                tag=fields[4] or None,
                label=fields[7] or None,
                head=head - 1 if head > 0 else None,
            )
            if fields[5]:
                token.attributes = parse_attributes(fields[5], word)
            self.encode_token(token)
            words.append(word)
            annotated.append(token)

        positioned, text = join_words(words)
        for token, offsets in zip(annotated, positioned):
            token.start = offsets.start
            token.end = offsets.end

        return finish_sentence(
            docid,
            annotated,
            text,
            comments="".join(comments),
            tagged_placeholder=True,
            encode_placeholder=self.encode_token,
        )

    def serialize(self, sentence: Sentence) -> Tuple[str, str]:
        if sentence.has_note():
            return sentence.docid, f"{sentence.note}\n"

        lines = []
        for index, original in enumerate(sentence.tokens, start=1):
            token = Token(
                word=original.word,
                category=original.category,
                tag=original.tag,
                label=original.label,
                head=original.head,
                attributes=list(original.attributes),
            )
            self.decode_token(token)
            head = token.head + 1 if token.head is not None else 0
            fields = [
                str(index),
                _underscore_if_empty(token.word),
                "_",
                _underscore_if_empty(token.category),
                _underscore_if_empty(token.tag),
                format_attributes(token.attributes),
                str(head),
                _underscore_if_empty(token.label),
                "_",
                "_",
            ]
            lines.append("\t".join(fields))
        return sentence.docid, "\n".join(lines) + "\n\n"
