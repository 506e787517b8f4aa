"""
textformats: conversion between corpus text formats and sentence/token structures.

Supports CoNLL dependency annotation, whitespace-tokenized text, untokenized
(character) text and raw English text with Penn Treebank style tokenization.
"""

__version__ = "1.0.0"

from textformats.config import FormatOptions
from textformats.conll import ConllFormat, ConllFormatError
from textformats.doc import Attribute, Sentence, Token
from textformats.format_registry import create_format, registry

__all__ = [
    'Attribute',
    'ConllFormat',
    'ConllFormatError',
    'FormatOptions',
    'Sentence',
    'Token',
    'create_format',
    'registry',
    '__version__',
]
