"""
Exceptions raised while streaming CoNLL-X corpora.
"""

from typing import Optional


class ConllxError(Exception):
    """Base class for all conllx_stream errors"""


class ConllxReadError(ConllxError):
    """
    A sentence in the corpus could not be read.

    Raised for a single pull only: the iterator that raised it can be
    polled again and continues with the next sentence.

    Args:
        message: Description of the problem
        line_no: 1-based line number in the corpus file (if known)
        path: Corpus file the sentence was read from (if known)
    """

    def __init__(self, message: str, line_no: Optional[int] = None, path: Optional[str] = None):
        self.line_no = line_no
        self.path = path

        location = ""
        if path is not None:
            location = f"{path}:"
        if line_no is not None:
            location = f"{location}{line_no}: "
        elif location:
            location = f"{location} "

        super().__init__(f"{location}{message}")
