from __future__ import annotations

import pytest

from textformats.config import CONFIG_ENV_VAR


def conll_line(token_id, word, category="_", tag="_", feats="_", head=0, label="_"):
    return "\t".join([str(token_id), word, "_", category, tag, feats, str(head), label, "_", "_"])


def conll_record(*lines: str) -> str:
    return "".join(line + "\n" for line in lines)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config file at an empty location so user settings never leak in."""
    path = tmp_path / "config.json"
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
    return path


@pytest.fixture
def dogs_record() -> str:
    return "1\tDogs\t_\tNOUN\tNNS\t_\t0\troot\t_\t_\n"


@pytest.fixture
def two_token_record() -> str:
    return conll_record(
        conll_line(1, "The", "DET", "DT", "Definite=Def|PronType=Art", 2, "det"),
        conll_line(2, "dogs", "NOUN", "NNS", "Number=Plur", 0, "root"),
    )


def check_offsets(sentence) -> bool:
    """Return True if token offsets are increasing and never overlap."""
    previous_end = -1
    for token in sentence.tokens:
        if token.start <= previous_end:
            return False
        previous_end = max(previous_end, token.end)
    return True
