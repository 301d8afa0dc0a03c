from enum import Enum
from typing import List


WORD_SEPARATOR = " "
LINE_SEPARATOR = "\n"


class CharClass(Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    EXTRA = "extra"
    PENDING = "pending"


def char_class(target: str, typed: str, i: int) -> CharClass:
    if i >= len(typed):
        return CharClass.PENDING
    if i >= len(target):
        return CharClass.EXTRA
    return CharClass.CORRECT if typed[i] == target[i] else CharClass.INCORRECT


def classify(target: str, typed: str) -> List[CharClass]:
    """
    Per-character classification used for live highlighting.
    One entry per position up to the longer of target/typed:
    typed chars are correct, incorrect or extra; untyped target chars are pending.
    """
    return [char_class(target, typed, i) for i in range(max(len(target), len(typed)))]


def is_token_correct(target: str, typed: str) -> bool:
    # scoring gives no partial credit
    return typed == target


def count_errors(target: str, typed: str) -> int:
    errors = 0
    for c in classify(target, typed):
        if c in (CharClass.INCORRECT, CharClass.EXTRA):
            errors += 1
    return errors


def separator_for(code_mode: bool) -> str:
    return LINE_SEPARATOR if code_mode else WORD_SEPARATOR


def is_commit_ready(target: str, typed: str, committing_char: str, code_mode: bool = False) -> bool:
    """A token is committed by its separator regardless of how much was typed."""
    return committing_char == separator_for(code_mode)


def sanitize_buffer(buffer: str, code_mode: bool = False) -> str:
    if buffer is None:
        return ""
    buffer = buffer.replace("\r\n", "\n").replace("\r", "\n")
    if code_mode and buffer.endswith(LINE_SEPARATOR):
        return buffer[:-1]
    return buffer
