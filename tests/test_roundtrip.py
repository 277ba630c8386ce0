"""
Round trip tests.

Validates that writing then parsing reproduces a document for both storage
strategies, and that re-serializing parsed output is stable.
"""

import pytest

import docjson


def _keyed_copy(doc: docjson.Document) -> docjson.KeyedDocument:
    keyed = docjson.KeyedDocument()
    for key, value in doc.items():
        if isinstance(value, docjson.Document):
            value = _keyed_copy(value)
        keyed.add(key, value)
    return keyed


def test_sequential_round_trip(sample_document: docjson.Document) -> None:
    parsed = docjson.loads(docjson.dumps(sample_document))

    assert isinstance(parsed, docjson.SequentialDocument)
    assert parsed.keys() == sample_document.keys()
    assert parsed == sample_document


def test_keyed_round_trip(sample_document: docjson.Document) -> None:
    keyed = _keyed_copy(sample_document)

    parsed = docjson.loads(
        docjson.dumps(keyed), document_factory=docjson.KeyedDocument
    )

    assert isinstance(parsed, docjson.KeyedDocument)
    assert set(parsed.keys()) == set(keyed.keys())
    assert parsed == keyed


@pytest.mark.parametrize("indent", ["\t", "  ", ""])
@pytest.mark.parametrize("identify", [False, True])
def test_reserialization_is_idempotent(
    sample_document: docjson.Document, indent: str, identify: bool
) -> None:
    options = {"indent": indent, "identify_number_values": identify}
    text = docjson.dumps(sample_document, **options)

    parsed = docjson.loads(text, identify_number_values=identify)

    assert docjson.dumps(parsed, **options) == text


def test_top_level_array_round_trip() -> None:
    doc = docjson.loads("[1, [2, {\"a\": null}], \"x\"]")

    assert docjson.loads(docjson.dumps(doc.get("array"))) == doc


def test_string_escapes_round_trip() -> None:
    text = "".join(chr(code) for code in range(0x00, 0xB0)) + "€😀"
    doc = docjson.SequentialDocument().add(text, text)

    parsed = docjson.loads(docjson.dumps(doc))

    assert parsed.items() == [(text, text)]


def test_newline_free_output_parses_strictly(
    sample_document: docjson.Document,
) -> None:
    """
    Escaped output never needs newlines inside strings.
    """
    text = docjson.dumps(sample_document)

    parsed = docjson.loads(text, allow_newline_in_strings=False)

    assert parsed == sample_document


def test_tuple_values_round_trip() -> None:
    doc = docjson.SequentialDocument()
    doc.add("pair", (1, 2)).add("nested", [("a", (True, None))])
    doc.add("map", {"t": (0.5,)})

    parsed = docjson.loads(docjson.dumps(doc))

    assert parsed.get("pair") == [1, 2]
    assert parsed == doc
    assert doc == parsed
    assert parsed != docjson.SequentialDocument().add("pair", (2, 1))
