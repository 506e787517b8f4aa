from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from .doc import Sentence, Token, byte_length

MAX_TOKENS = 100
PLACEHOLDER_WORD = "#DUMMY#"
PLACEHOLDER_TAG = "NN"
PLACEHOLDER_CATEGORY = "NOUN"
SKIP_NOTE_PREFIX = "#skip because token_size() > 100\n#"


def make_placeholder_token(tagged: bool = False) -> Token:
    token = Token(word=PLACEHOLDER_WORD, start=0, end=6)
    if tagged:
        token.tag = PLACEHOLDER_TAG
        token.category = PLACEHOLDER_CATEGORY
    return token


def join_words(words: Iterable[str]) -> Tuple[List[Token], str]:
    """
    Build tokens for words separated by single spaces.

    Returns the tokens (with inclusive byte offsets into the joined text)
    and the joined text itself.
    """
    tokens: List[Token] = []
    parts: List[str] = []
    offset = 0
    for word in words:
        if parts:
            parts.append(" ")
            offset += 1
        size = byte_length(word)
        tokens.append(Token(word=word, start=offset, end=offset + size - 1))
        parts.append(word)
        offset += size
    return tokens, "".join(parts)


def finish_sentence(
    docid: str,
    tokens: List[Token],
    text: str,
    *,
    note_text: Optional[str] = None,
    comments: str = "",
    tagged_placeholder: bool = False,
    encode_placeholder=None,
) -> Optional[Sentence]:
    """
    Apply the token-count policy shared by all readers.

    Args:
        docid: Document identifier for the new sentence
        tokens: Tokens built from the record
        text: Reconstructed sentence text
        note_text: Text quoted in the skip note (defaults to ``text``)
        comments: Accumulated comment lines; used when no tokens were read
        tagged_placeholder: Give the placeholder token the NN/NOUN tags
        encode_placeholder: Callable applied to the placeholder token (field encodings)

    Returns:
        The finished sentence, or None when the record produced nothing.
    """
    if len(tokens) > MAX_TOKENS:
        quoted = text if note_text is None else note_text
        return _placeholder_sentence(
            docid,
            f"{SKIP_NOTE_PREFIX}{quoted}\n",
            tagged_placeholder,
            encode_placeholder,
        )
    if tokens:
        return Sentence(docid=docid, text=text, tokens=tokens)
    if comments:
        return _placeholder_sentence(docid, comments, tagged_placeholder, encode_placeholder)
    return None


def _placeholder_sentence(docid: str, note: str, tagged: bool, encode) -> Sentence:
    token = make_placeholder_token(tagged)
    if encode is not None:
        encode(token)
    return Sentence(docid=docid, text=PLACEHOLDER_WORD, tokens=[token], note=note)


def sentence_to_json(sentence: Sentence) -> dict:
    data = sentence.to_dict()
    for index, token in enumerate(data["tokens"], start=1):
        token["id"] = index
    return data

