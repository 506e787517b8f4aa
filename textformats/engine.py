from __future__ import annotations

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import IO, Iterable, Iterator, List, Optional

from .config import FormatOptions
from .doc import Sentence
from .doc_utils import sentence_to_json
from .format_registry import DocumentFormat, create_format

logger = logging.getLogger(__name__)

JSON_OUTPUT = "json"


def iter_format_records(stream: IO, fmt: DocumentFormat) -> Iterator[str]:
    while True:
        record, has_more = fmt.read_record(stream)
        if not has_more:
            return
        yield record


def read_sentences(stream: IO, fmt: DocumentFormat, docid: str = "") -> Iterator[Sentence]:
    """Read records from ``stream`` and yield the sentences they produce."""
    for record in iter_format_records(stream, fmt):
        sentence = fmt.parse(docid, record)
        if sentence is not None:
            yield sentence


def convert_records(
    records: Iterable[str],
    fmt: DocumentFormat,
    docid: str = "",
    *,
    workers: int = 1,
) -> List[Sentence]:
    """
    Parse a batch of records, keeping input order.

    Parsing is stateless per record, so with ``workers > 1`` the records are
    parsed on a thread pool. The first fatal error is re-raised.
    """
    if workers <= 1:
        parsed = [fmt.parse(docid, record) for record in records]
    else:
        with ThreadPoolExecutor(max_workers=workers) as executor:
            parsed = list(executor.map(lambda record: fmt.parse(docid, record), records))
    return [sentence for sentence in parsed if sentence is not None]


def write_sentences(sentences: Iterable[Sentence], fmt: Optional[DocumentFormat], out: IO) -> int:
    """Serialize ``sentences`` to ``out``; a ``None`` format writes JSON lines."""
    count = 0
    for sentence in sentences:
        if fmt is None:
            out.write(json.dumps(sentence_to_json(sentence), ensure_ascii=False) + "\n")
        else:
            _, value = fmt.serialize(sentence)
            out.write(value)
        count += 1
    return count


def convert(
    stream: IO,
    out: IO,
    input_format: str,
    output_format: str,
    *,
    options: Optional[FormatOptions] = None,
    docid: str = "",
    workers: int = 1,
) -> int:
    """
    Convert every record of ``stream`` from one format to another.

    Args:
        stream: Input stream with a ``readline()`` method
        out: Output stream
        input_format: Registered format name or alias to read
        output_format: Registered format name or alias to write, or ``json``
        options: Field encoding options shared by reader and writer
        docid: Document identifier stored on every sentence
        workers: Number of threads used to parse records

    Returns:
        Number of sentences written.
    """
    options = options or FormatOptions()
    reader = create_format(input_format, options)
    writer = None if output_format.lower() == JSON_OUTPUT else create_format(output_format, options)

    if workers > 1:
        records = list(iter_format_records(stream, reader))
        sentences: Iterable[Sentence] = convert_records(records, reader, docid, workers=workers)
    else:
        sentences = read_sentences(stream, reader, docid)

    count = write_sentences(sentences, writer, out)
    logger.info("Converted %d sentence(s) from %s to %s", count, reader.name, output_format)
    return count
