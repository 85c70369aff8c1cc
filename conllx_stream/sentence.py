"""
Sentence Data Model

Tokens and sentences as read from CoNLL-X files. The pipeline itself
only looks at ``sentence.graph_len()``; everything else is carried along for
the consumer.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence

EMPTY = "_"


def _column(value: Optional[str]) -> str:
    return EMPTY if value is None else value


def _int_column(value: Optional[int]) -> str:
    return EMPTY if value is None else str(value)


class Features:
    """
    Token features from the FEATS column.

    Features are separated by ``|``; a feature is either a bare key or a
    key/value pair written as ``key:value`` or ``key=value``. The raw
    string is kept so that writing a sentence reproduces the input.
    """

    def __init__(self, raw: str):
        self.raw = raw

    @classmethod
    def from_dict(cls, features: Dict[str, Optional[str]]) -> "Features":
        parts = [k if v is None else f"{k}:{v}" for k, v in features.items()]
        return cls("|".join(parts))

    def as_dict(self) -> Dict[str, Optional[str]]:
        result: Dict[str, Optional[str]] = {}
        for feature in self.raw.split("|"):
            if not feature:
                continue
            for sep in (":", "="):
                if sep in feature:
                    key, value = feature.split(sep, 1)
                    result[key] = value
                    break
            else:
                result[feature] = None
        return result

    def __eq__(self, other) -> bool:
        return isinstance(other, Features) and self.raw == other.raw

    def __repr__(self) -> str:
        return f"Features({self.raw!r})"


@dataclass
class Token:
    """A single CoNLL-X token. Absent columns (``_``) are None."""
    form: str
    lemma: Optional[str] = None
    cpos: Optional[str] = None
    pos: Optional[str] = None
    features: Optional[Features] = None
    head: Optional[int] = None
    head_rel: Optional[str] = None
    p_head: Optional[int] = None
    p_head_rel: Optional[str] = None

    def to_conllx(self, token_id: int) -> str:
        """Render the token as a tab-separated CoNLL-X line"""
        return "\t".join([
            str(token_id),
            self.form,
            _column(self.lemma),
            _column(self.cpos),
            _column(self.pos),
            _column(self.features.raw if self.features is not None else None),
            _int_column(self.head),
            _column(self.head_rel),
            _int_column(self.p_head),
            _column(self.p_head_rel),
        ])


@dataclass
class Sentence:
    """
    A sentence: an ordered list of tokens.

    ``len(sentence)`` is the number of tokens. The corpus pipeline
    filters on ``graph_len()``, which also counts the artificial root
    node, so a sentence of ``max_len`` tokens is dropped.
    """
    tokens: List[Token] = field(default_factory=list)

    @classmethod
    def from_forms(cls, forms: Sequence[str], pos_tags: Optional[Sequence[str]] = None) -> "Sentence":
        """
        Construct a sentence from forms and (optionally) POS tags.

        Raises:
            ValueError: if POS tags are given, but their number differs
                from the number of forms
        """
        if pos_tags is None:
            return cls([Token(form=form) for form in forms])

        if len(pos_tags) != len(forms):
            raise ValueError(
                f"Number of POS tags ({len(pos_tags)}) differs from number of forms ({len(forms)})"
            )
        return cls([Token(form=form, pos=pos) for form, pos in zip(forms, pos_tags)])

    @property
    def forms(self) -> List[str]:
        return [token.form for token in self.tokens]

    @property
    def pos_tags(self) -> List[Optional[str]]:
        return [token.pos for token in self.tokens]

    def __len__(self) -> int:
        return len(self.tokens)

    def graph_len(self) -> int:
        """Number of nodes in the dependency graph: the tokens plus the artificial root"""
        return len(self.tokens) + 1

    def __iter__(self) -> Iterator[Token]:
        return iter(self.tokens)

    def __getitem__(self, idx: int) -> Token:
        return self.tokens[idx]

    def to_conllx(self) -> str:
        """Render the sentence as CoNLL-X lines (without trailing blank line)"""
        return "\n".join(token.to_conllx(i) for i, token in enumerate(self.tokens, start=1))
