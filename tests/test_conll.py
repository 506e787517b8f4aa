from __future__ import annotations

import logging

import pytest

from conftest import check_offsets, conll_line, conll_record
from textformats.config import FormatOptions
from textformats.conll import (
    ConllFormat,
    ConllFormatError,
    format_attributes,
    parse_attributes,
)
from textformats.doc import Attribute, Sentence, Token
from textformats.doc_utils import SKIP_NOTE_PREFIX


def test_parse_single_token(dogs_record):
    sentence = ConllFormat().parse("doc1", dogs_record)

    assert sentence.docid == "doc1"
    assert sentence.text == "Dogs"
    assert sentence.note is None
    [token] = sentence.tokens
    assert token.word == "Dogs"
    assert token.category == "NOUN"
    assert token.tag == "NNS"
    assert token.head is None
    assert token.label == "root"
    assert token.attributes == []
    assert (token.start, token.end) == (0, 3)


def test_serialize_single_token(dogs_record):
    fmt = ConllFormat()
    docid, value = fmt.serialize(fmt.parse("doc1", dogs_record))

    assert docid == "doc1"
    assert value == "1\tDogs\t_\tNOUN\tNNS\t_\t0\troot\t_\t_\n\n"


def test_heads_are_zero_based(two_token_record):
    sentence = ConllFormat().parse("", two_token_record)

    assert [t.head for t in sentence.tokens] == [1, None]
    assert sentence.text == "The dogs"
    assert [(t.start, t.end) for t in sentence.tokens] == [(0, 2), (4, 7)]


def test_round_trip_keeps_used_fields(two_token_record):
    fmt = ConllFormat()
    _, value = fmt.serialize(fmt.parse("", two_token_record))

    original = [line.split("\t") for line in two_token_record.splitlines()]
    written = [line.split("\t") for line in value.rstrip("\n").split("\n")]
    assert len(original) == len(written)
    for before, after in zip(original, written):
        for index in (0, 1, 3, 4, 5, 6, 7):
            assert before[index] == after[index]
        assert after[2] == after[8] == after[9] == "_"


def test_lemma_and_extra_columns_are_dropped():
    record = "1\tdogs\tdog\tNOUN\tNNS\t_\t0\troot\t0:root\tSpaceAfter=No\n"
    fmt = ConllFormat()
    _, value = fmt.serialize(fmt.parse("", record))
    assert value == "1\tdogs\t_\tNOUN\tNNS\t_\t0\troot\t_\t_\n\n"


def test_offsets_count_utf8_bytes():
    record = conll_record(conll_line(1, "naïve"), conll_line(2, "café"))
    sentence = ConllFormat().parse("", record)

    assert [(t.start, t.end) for t in sentence.tokens] == [(0, 5), (7, 11)]
    assert check_offsets(sentence)


def test_comment_only_record_gives_placeholder():
    sentence = ConllFormat().parse("d", "#sent_id = 1\n")

    assert sentence.note == "#sent_id = 1\n"
    assert sentence.text == "#DUMMY#"
    [token] = sentence.tokens
    assert token.word == "#DUMMY#"
    assert (token.start, token.end) == (0, 6)
    assert token.tag == "NN"
    assert token.category == "NOUN"


def test_comment_note_round_trips():
    fmt = ConllFormat()
    _, value = fmt.serialize(fmt.parse("", "# sent_id = 1\n# text = Hi\n"))
    assert value == "# sent_id = 1\n# text = Hi\n\n"


def test_comment_keeps_first_field_only():
    sentence = ConllFormat().parse("", "# text = a\tb\n")
    assert sentence.note == "# text = a\n"


def test_comments_are_ignored_when_tokens_exist(dogs_record):
    sentence = ConllFormat().parse("", "# sent_id = 7\n" + dogs_record)
    assert sentence.note is None
    assert [t.word for t in sentence.tokens] == ["Dogs"]


@pytest.mark.parametrize("record", ["", "\n", "\n\n\n"])
def test_empty_record_is_dropped(record):
    assert ConllFormat().parse("", record) is None


def test_long_sentence_is_replaced():
    words = [f"w{i}" for i in range(1, 102)]
    record = conll_record(*(conll_line(i, word) for i, word in enumerate(words, start=1)))

    sentence = ConllFormat().parse("d", record)

    assert len(sentence.tokens) == 1
    assert sentence.tokens[0].word == "#DUMMY#"
    assert sentence.text == "#DUMMY#"
    assert sentence.note.startswith("#skip because token_size() > 100")
    assert sentence.note == SKIP_NOTE_PREFIX + " ".join(words) + "\n"


def test_hundred_tokens_are_kept():
    record = conll_record(*(conll_line(i, "x") for i in range(1, 101)))
    sentence = ConllFormat().parse("", record)
    assert len(sentence.tokens) == 100
    assert sentence.note is None


def test_multiword_ranges_are_skipped():
    record = conll_record(
        "1-2\tdon't\t_\t_\t_\t_\t_\t_\t_\t_",
        conll_line(1, "do", "AUX", "VBP", head=0, label="root"),
        conll_line(2, "n't", "PART", "RB", head=1, label="advmod"),
    )
    sentence = ConllFormat().parse("", record)
    assert [t.word for t in sentence.tokens] == ["do", "n't"]
    assert sentence.text == "do n't"


def test_too_few_fields_is_fatal():
    with pytest.raises(ConllFormatError, match="at least 8"):
        ConllFormat().parse("", "1\tDogs\t_\tNOUN\tNNS\t_\t0\n")


def test_unexpected_id_is_fatal():
    record = conll_record(conll_line(1, "a"), conll_line(3, "b"))
    with pytest.raises(ConllFormatError) as excinfo:
        ConllFormat().parse("", record)
    assert excinfo.value.line_number == 2


def test_ids_restart_per_record(dogs_record):
    fmt = ConllFormat()
    assert fmt.parse("", dogs_record) is not None
    assert fmt.parse("", dogs_record) is not None


def test_non_numeric_head_is_fatal():
    with pytest.raises(ConllFormatError, match="head"):
        ConllFormat().parse("", "1\tDogs\t_\tNOUN\tNNS\t_\troot\troot\t_\t_\n")


@pytest.mark.parametrize("token_id", ["+1", " 1", "1 ", "١", "1.0"])
def test_only_plain_ascii_ids_are_accepted(token_id):
    record = "\t".join([token_id, "Dogs", "_", "NOUN", "NNS", "_", "0", "root", "_", "_"]) + "\n"
    with pytest.raises(ConllFormatError, match="token id"):
        ConllFormat().parse("", record)


def test_signed_head_is_fatal():
    with pytest.raises(ConllFormatError, match="head"):
        ConllFormat().parse("", "1\tDogs\t_\tNOUN\tNNS\t_\t+1\troot\t_\t_\n")


def test_underscore_head_means_no_head():
    sentence = ConllFormat().parse("", "1\tDogs\t_\t_\t_\t_\t_\t_\t_\t_\n")
    [token] = sentence.tokens
    assert token.head is None
    assert token.category is None and token.tag is None and token.label is None


def test_underscore_word_is_kept():
    sentence = ConllFormat().parse("", conll_line(1, "_") + "\n")
    assert sentence.tokens[0].word == "_"


def test_parse_attributes():
    assert parse_attributes("Case=Nom|Number=Sing") == [
        Attribute("Case", "Nom"),
        Attribute("Number", "Sing"),
    ]
    assert parse_attributes("Fem|Sing") == [Attribute("Fem", "on"), Attribute("Sing", "on")]
    assert parse_attributes("Typo=a=b") == [Attribute("Typo", "a=b")]


def test_empty_attribute_value_is_dropped(caplog):
    with caplog.at_level(logging.WARNING, logger="textformats.conll"):
        attributes = parse_attributes("Case=|Number=Sing", word="dogs")

    assert attributes == [Attribute("Number", "Sing")]
    assert "Invalid attributes string: Case=|Number=Sing" in caplog.text


def test_empty_attribute_name_is_kept():
    assert parse_attributes("=x|Case=Nom") == [Attribute("", "x"), Attribute("Case", "Nom")]
    assert format_attributes(parse_attributes("=x|Case=Nom")) == "=x|Case=Nom"


def test_format_attributes():
    assert format_attributes([]) == "_"
    assert format_attributes([Attribute("Fem", "on"), Attribute("Case", "Nom")]) == "Fem|Case=Nom"


@pytest.mark.parametrize(
    "attributes",
    [
        [Attribute("Case", "Nom")],
        [Attribute("Case", "Nom"), Attribute("Number", "Plur"), Attribute("Person", "3")],
        [Attribute("Fem", "on"), Attribute("Sing", "on")],
    ],
)
def test_attributes_round_trip(attributes):
    assert parse_attributes(format_attributes(attributes)) == attributes


def test_join_category_to_pos(dogs_record):
    fmt = ConllFormat(FormatOptions(join_category_to_pos=True))
    sentence = fmt.parse("", dogs_record)

    token = sentence.tokens[0]
    assert token.tag == "NOUN++NNS"
    assert token.category is None

    _, value = fmt.serialize(sentence)
    assert value == "1\tDogs\t_\tNOUN\tNNS\t_\t0\troot\t_\t_\n\n"
    assert token.tag == "NOUN++NNS"


def test_add_pos_as_attribute(two_token_record):
    fmt = ConllFormat(FormatOptions(add_pos_as_attribute=True))
    sentence = fmt.parse("", two_token_record)

    assert sentence.tokens[1].attributes == [Attribute("Number", "Plur"), Attribute("fPOS", "NNS")]

    _, value = fmt.serialize(sentence)
    assert value.split("\n")[1].split("\t")[5] == "Number=Plur"
    assert sentence.tokens[1].attributes[-1] == Attribute("fPOS", "NNS")


def test_add_pos_skips_empty_tag():
    fmt = ConllFormat(FormatOptions(add_pos_as_attribute=True))
    sentence = fmt.parse("", conll_line(1, "x") + "\n")
    assert sentence.tokens[0].attributes == []


def test_both_encodings(dogs_record):
    fmt = ConllFormat(FormatOptions(join_category_to_pos=True, add_pos_as_attribute=True))
    sentence = fmt.parse("", dogs_record)

    token = sentence.tokens[0]
    assert token.tag == "NOUN++NNS"
    assert token.attributes == [Attribute("fPOS", "NOUN++NNS")]
    _, value = fmt.serialize(sentence)
    assert value == "1\tDogs\t_\tNOUN\tNNS\t_\t0\troot\t_\t_\n\n"


def test_placeholder_gets_encodings():
    fmt = ConllFormat(FormatOptions(join_category_to_pos=True, add_pos_as_attribute=True))
    token = fmt.parse("", "# only a comment\n").tokens[0]
    assert token.tag == "NOUN++NN"
    assert token.category is None
    assert token.attributes == [Attribute("fPOS", "NOUN++NN")]


def test_remove_pos_only_drops_trailing_entry():
    fmt = ConllFormat(FormatOptions(add_pos_as_attribute=True))
    trailing = Sentence(tokens=[Token("a", 0, 0, attributes=[Attribute("Case", "Nom"), Attribute("fPOS", "X")])])
    leading = Sentence(tokens=[Token("a", 0, 0, attributes=[Attribute("fPOS", "X"), Attribute("Case", "Nom")])])

    assert fmt.serialize(trailing)[1].split("\t")[5] == "Case=Nom"
    assert fmt.serialize(leading)[1].split("\t")[5] == "fPOS=X|Case=Nom"


def test_serialize_empty_fields():
    sentence = Sentence(tokens=[Token("", 0, -1)])
    _, value = ConllFormat().serialize(sentence)
    assert value == "1\t_\t_\t_\t_\t_\t0\t_\t_\t_\n\n"
