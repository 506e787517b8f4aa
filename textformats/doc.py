from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


def byte_length(text: str) -> int:
    return len(text.encode("utf-8"))


@dataclass
class Attribute:
    """Morphological attribute of a token (name/value pair)."""
    name: str
    value: str

    def to_dict(self) -> dict:
        return {"name": self.name, "value": self.value}


@dataclass
class Token:
    word: str
    start: int = 0
    end: int = -1  # Inclusive byte offset; empty word gives end == start - 1
    category: Optional[str] = None
    tag: Optional[str] = None
    label: Optional[str] = None
    head: Optional[int] = None  # 0-based token index, None for the root
    attributes: List[Attribute] = field(default_factory=list)

    def to_dict(self) -> dict:
        result = {
            "word": self.word,
            "start": self.start,
            "end": self.end,
        }
        if self.category is not None:
            result["category"] = self.category
        if self.tag is not None:
            result["tag"] = self.tag
        if self.label is not None:
            result["label"] = self.label
        if self.head is not None:
            result["head"] = self.head
        if self.attributes:
            result["attributes"] = [a.to_dict() for a in self.attributes]
        return result


@dataclass
class Sentence:
    docid: str = ""
    text: str = ""
    tokens: List[Token] = field(default_factory=list)
    note: Optional[str] = None  # Skip/comment annotation, written back verbatim

    def has_note(self) -> bool:
        return self.note is not None

    def add_token(self, word: str, start: int, end: int, **kwargs) -> Token:
        token = Token(word=word, start=start, end=end, **kwargs)
        self.tokens.append(token)
        return token

    def to_dict(self) -> dict:
        result = {
            "docid": self.docid,
            "text": self.text,
            "tokens": [tok.to_dict() for tok in self.tokens],
        }
        if self.note is not None:
            result["note"] = self.note
        return result
