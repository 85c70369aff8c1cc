"""
Tests for CoNLL-X reading and writing

Run with:
    pytest conllx_stream/test_reader.py
"""

import os
import tempfile

import pytest

from conllx_stream.errors import ConllxReadError
from conllx_stream.reader import Reader
from conllx_stream.sentence import Features, Sentence, Token
from conllx_stream.writer import Writer, write_sentences


GOOD_CORPUS = (
    "1\tThe\tthe\tDET\tDT\t_\t2\tdet\t_\t_\n"
    "2\tdog\tdog\tNOUN\tNN\tnumber:sg|case:nom\t3\tnsubj\t_\t_\n"
    "3\tbarks\tbark\tVERB\tVBZ\t_\t0\tROOT\t_\t_\n"
    "\n"
    "1\tHello\thello\tINTJ\tUH\t_\t0\tROOT\t_\t_\n"
)

# Line 4 has three columns, line 8 skips ID 2
BROKEN_CORPUS = (
    "1\tOne\t_\t_\t_\t_\t_\t_\t_\t_\n"
    "2\ttwo\t_\t_\t_\t_\t_\t_\t_\t_\n"
    "\n"
    "1\tbroken\tline\n"
    "\n"
    "\n"
    "1\tskip\t_\t_\t_\t_\t_\t_\t_\t_\n"
    "3\tid\t_\t_\t_\t_\t_\t_\t_\t_\n"
    "\n"
    "1\tLast\t_\t_\t_\t_\t_\t_\t_\t_\n"
    "\n"
)


def write_text(directory: str, text: str, name: str = "corpus.conll") -> str:
    path = os.path.join(directory, name)
    with open(path, "w", encoding="utf-8") as f:
        f.write(text)
    return path


def test_reader_parses_sentences():
    with tempfile.TemporaryDirectory() as tmp:
        with Reader(write_text(tmp, GOOD_CORPUS)) as reader:
            sentences = list(reader)

    assert [len(s) for s in sentences] == [3, 1]

    dog = sentences[0][1]
    assert dog.form == "dog"
    assert dog.lemma == "dog"
    assert dog.cpos == "NOUN"
    assert dog.pos == "NN"
    assert dog.features.as_dict() == {"number": "sg", "case": "nom"}
    assert dog.head == 3
    assert dog.head_rel == "nsubj"
    assert dog.p_head is None
    assert dog.p_head_rel is None

    assert sentences[0][0].features is None
    assert sentences[0].forms == ["The", "dog", "barks"]
    assert sentences[1].pos_tags == ["UH"]


def test_reader_continues_after_error():
    with tempfile.TemporaryDirectory() as tmp:
        reader = Reader(write_text(tmp, BROKEN_CORPUS))

        assert next(reader).forms == ["One", "two"]

        with pytest.raises(ConllxReadError) as excinfo:
            next(reader)
        assert excinfo.value.line_no == 4

        with pytest.raises(ConllxReadError) as excinfo:
            next(reader)
        assert excinfo.value.line_no == 8

        assert next(reader).forms == ["Last"]

        with pytest.raises(StopIteration):
            next(reader)
        # Exhaustion is final
        with pytest.raises(StopIteration):
            next(reader)
        assert reader.closed


def test_reader_invalid_encoding_is_confined_to_its_sentence():
    data = (
        b"1\ta\t_\t_\t_\t_\t_\t_\t_\t_\n\n"
        b"1\tb\xff\t_\t_\t_\t_\t_\t_\t_\t_\n\n"
        b"1\tc\t_\t_\t_\t_\t_\t_\t_\t_\n"
    )
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "latin1.conll")
        with open(path, "wb") as f:
            f.write(data)

        reader = Reader(path)
        assert next(reader).forms == ["a"]

        with pytest.raises(ConllxReadError, match="utf-8") as excinfo:
            next(reader)
        assert excinfo.value.line_no == 3

        assert next(reader).forms == ["c"]
        with pytest.raises(StopIteration):
            next(reader)


def test_reader_invalid_head():
    text = "1\tword\t_\t_\t_\t_\tx\t_\t_\t_\n"
    with tempfile.TemporaryDirectory() as tmp:
        reader = Reader(write_text(tmp, text))
        with pytest.raises(ConllxReadError, match="HEAD"):
            next(reader)
        with pytest.raises(StopIteration):
            next(reader)


def test_reader_without_trailing_newline():
    with tempfile.TemporaryDirectory() as tmp:
        path = write_text(tmp, GOOD_CORPUS.rstrip("\n"))
        assert [len(s) for s in Reader(path)] == [3, 1]


def test_reader_missing_file():
    with pytest.raises(FileNotFoundError):
        Reader("/nonexistent/corpus.conll")


def test_write_and_read_back():
    sentences = [
        Sentence.from_forms(["A", "small", "test"], ["DT", "JJ", "NN"]),
        Sentence([Token(form="x", lemma="x", features=Features("a=b|c"), head=0, head_rel="ROOT")]),
    ]

    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "out.conll")
        assert write_sentences(path, sentences) == 2

        with Reader(path) as reader:
            assert list(reader) == sentences


def test_writer_format():
    with tempfile.TemporaryDirectory() as tmp:
        path = os.path.join(tmp, "out.conll")
        with Writer(path) as writer:
            writer.write(Sentence.from_forms(["a"]))
            writer.write(Sentence.from_forms(["b", "c"]))

        with open(path, encoding="utf-8") as f:
            text = f.read()

    assert text == (
        "1\ta\t_\t_\t_\t_\t_\t_\t_\t_\n"
        "\n"
        "1\tb\t_\t_\t_\t_\t_\t_\t_\t_\n"
        "2\tc\t_\t_\t_\t_\t_\t_\t_\t_\n"
    )


def test_sentence_from_forms():
    sentence = Sentence.from_forms(["a", "b"], ["X", "Y"])
    assert len(sentence) == 2
    assert [token.pos for token in sentence] == ["X", "Y"]

    with pytest.raises(ValueError):
        Sentence.from_forms(["a", "b"], ["X"])


def test_features():
    features = Features("number:sg|person=3|Foreign")
    assert features.as_dict() == {"number": "sg", "person": "3", "Foreign": None}
    assert Features.from_dict({"number": "sg", "Foreign": None}).raw == "number:sg|Foreign"
    assert Features("").as_dict() == {}
