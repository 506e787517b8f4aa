"""
Registry of document formats.

Formats are registered once at import time under a canonical name and any
number of aliases; lookups are case-insensitive.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import IO, Callable, Dict, List, Optional, Protocol, Tuple

from .config import FormatOptions
from .conll import ConllFormat
from .doc import Sentence
from .english import EnglishTextFormat
from .records import BLOCK, LINE
from .tokenized import TokenizedTextFormat, UntokenizedTextFormat


class DocumentFormat(Protocol):
    name: str
    record_mode: str

    def read_record(self, stream: IO) -> Tuple[str, bool]:
        ...

    def parse(self, docid: str, record: str) -> Optional[Sentence]:
        ...

    def serialize(self, sentence: Sentence) -> Tuple[str, str]:
        ...


FormatFactory = Callable[[FormatOptions], DocumentFormat]


@dataclass(frozen=True)
class FormatEntry:
    name: str
    aliases: tuple[str, ...]
    factory: FormatFactory
    record_mode: str
    description: str = ""

    def create(self, options: Optional[FormatOptions] = None) -> DocumentFormat:
        return self.factory(options or FormatOptions())


class FormatRegistry:
    def __init__(self) -> None:
        self._formats: Dict[str, FormatEntry] = {}

    def register(self, entry: FormatEntry) -> None:
        self._formats[entry.name.lower()] = entry
        for alias in entry.aliases:
            self._formats[alias.lower()] = entry

    def get(self, name: str) -> Optional[FormatEntry]:
        if not name:
            return None
        return self._formats.get(name.lower())

    def entries(self) -> List[FormatEntry]:
        seen: List[FormatEntry] = []
        for entry in self._formats.values():
            if entry not in seen:
                seen.append(entry)
        return seen

    def names(self) -> List[str]:
        return [entry.name for entry in self.entries()]


registry = FormatRegistry()

registry.register(
    FormatEntry(
        name="conll-sentence",
        aliases=("conll", "conllu", "conll-u"),
        factory=ConllFormat,
        record_mode=BLOCK,
        description="Tab-separated CoNLL/CoNLL-U dependency annotation, blank line between sentences.",
    )
)
registry.register(
    FormatEntry(
        name="tokenized-text",
        aliases=("tokenized",),
        factory=TokenizedTextFormat,
        record_mode=LINE,
        description="One sentence per line, tokens separated by single spaces.",
    )
)
registry.register(
    FormatEntry(
        name="untokenized-text",
        aliases=("untokenized", "chars"),
        factory=UntokenizedTextFormat,
        record_mode=LINE,
        description="One sentence per line, every character is a token.",
    )
)
registry.register(
    FormatEntry(
        name="english-text",
        aliases=("english", "raw"),
        factory=EnglishTextFormat,
        record_mode=LINE,
        description="Raw English text, one sentence per line, Penn Treebank tokenization.",
    )
)


def create_format(name: str, options: Optional[FormatOptions] = None) -> DocumentFormat:
    entry = registry.get(name)
    if entry is None:
        raise ValueError(f"Unknown format '{name}'. Supported formats: {', '.join(registry.names())}")
    return entry.create(options)
