"""
Penn Treebank style tokenization of raw English text.

Adapted from the tokenizer.sed script by Robert MacIntyre (University of
Pennsylvania, 1995). Input is raw text with one sentence per line. Every
line is first normalized (Unicode punctuation to ASCII) and then segmented
by an ordered list of rewrite rules; the result is read as tokenized text.

Each rule is a global search-and-replace over the output of the previous
rule, so the order of both tables matters.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .doc import Sentence
from .tokenized import LineTextFormat, parse_tokenized

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RewriteRule:
    pattern: re.Pattern
    template: str

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.template, text)


def _rules(table: Iterable[tuple]) -> List[RewriteRule]:
    return [RewriteRule(re.compile(pattern), template) for pattern, template in table]


PREPROCESSING_RULES = _rules([
    # Punctuation
    ("’", "'"),
    ("…", "..."),
    ("---", "--"),
    ("—", "--"),
    ("–", "--"),
    ("，", ","),
    ("。", "."),
    ("！", "!"),
    ("？", "?"),
    ("：", ":"),
    ("；", ";"),
    ("＆", "&"),
    # Brackets
    (r"\[", "("),
    (r"\]", ")"),
    (r"\{", "("),
    (r"\}", ")"),
    ("【", "("),
    ("】", ")"),
    ("（", "("),
    ("）", ")"),
    # Quotation marks
    ('"', '"'),
    ("″", '"'),
    ("“", '"'),
    ("„", '"'),
    ("‵‵", '"'),
    ("”", '"'),
    ("’", '"'),  # never matches: already rewritten to an apostrophe above
    ("‘", '"'),
    ("′′", '"'),
    ("‹", '"'),
    ("›", '"'),
    ("«", '"'),
    ("»", '"'),
    # Decorations that break sentences
    ("|", ""),  # empty alternation: matches only the empty string, so pipes are kept
    ("·", ""),
    ("•", ""),
    ("●", ""),
    ("▪", ""),
    ("■", ""),
    ("□", ""),
    ("❑", ""),
    ("◆", ""),
    ("★", ""),
    ("＊", ""),
    ("♦", ""),
])

TOKENIZATION_RULES = _rules([
    # Opening quotes; closing quotes are handled further down
    (r'^"', "`` "),
    (r'([ (\[{<])"', r"\1 `` "),

    (r"\.\.\.", " ... "),
    (r"[,;:@#$%&]", r" \g<0> "),

    # Sentences are already split, so only the FINAL period is separated
    (r"""([^.])(\.)([\])}>"']*)[ ]*\Z""", r"\1 \2\3 "),
    # Question and exclamation marks have no abbreviation ambiguity
    (r"[?!]", r" \g<0> "),

    # Brackets
    (r"[\]\[(){}<>]", r" \g<0> "),
    (r"\(", "-LRB-"),
    (r"\)", "-RRB-"),
    (r"\]", "-LSB-"),
    (r"\]", "-RSB-"),  # never matches: "]" is already -LSB-
    (r"\{", "-LCB-"),
    (r"\}", "-RCB-"),

    (r"--", " -- "),

    # Pad both ends so the rules below can rely on surrounding spaces
    (r"\Z", " "),
    (r"\A", " "),

    (r'"', " '' "),
    # Possessive or closing single quote
    (r"([^'])' ", r"\1 ' "),
    # it's, I'm, we'd
    (r"'([sSmMdD]) ", r" '\1 "),
    (r"'ll ", " 'll "),
    (r"'re ", " 're "),
    (r"'ve ", " 've "),
    (r"n't ", " n't "),
    (r"'LL ", " 'LL "),
    (r"'RE ", " 'RE "),
    (r"'VE ", " 'VE "),
    (r"N'T ", " N'T "),

    (r" ([Cc])annot ", r" \1an not "),
    (r" ([Dd])'ye ", r" \1' ye "),
    (r" ([Gg])imme ", r" \1im me "),
    (r" ([Gg])onna ", r" \1on na "),
    (r" ([Gg])otta ", r" \1ot ta "),
    (r" ([Ll])emme ", r" \1em me "),
    (r" ([Mm])ore'n ", r" \1ore 'n "),
    (r" '([Tt])is ", r" '\1 is "),
    (r" '([Tt])was ", r" '\1 was "),
    (r" ([Ww])anna ", r" \1an na "),
    (r" ([Ww])haddya ", r" \1ha dd ya "),
    (r" ([Ww])hatcha ", r" \1ha t cha "),

    # Collapse and trim spaces
    (r"  *", " "),
    (r"^ *", ""),
])


def apply_rules(text: str, rules: Iterable[RewriteRule]) -> str:
    for rule in rules:
        text = rule.apply(text)
    return text


def rewrite_english(text: str) -> str:
    """Normalize punctuation and split ``text`` into space-separated PTB tokens."""
    rewritten = apply_rules(text, PREPROCESSING_RULES)
    return apply_rules(rewritten, TOKENIZATION_RULES)


class EnglishTextFormat(LineTextFormat):
    """Reader for raw English text, one sentence per line."""

    name = "english-text"

    def parse(self, docid: str, record: str) -> Optional[Sentence]:
        rewritten = rewrite_english(record)
        logger.debug("Tokenized %r as %r", record, rewritten)
        return parse_tokenized(docid, rewritten)
