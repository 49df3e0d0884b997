import sys
from datetime import date
from typing import Callable, Optional, TextIO, TypeVar

from hotel_console.constants.response_messages import ERROR_INVALID_INPUT
from hotel_console.utils.validators import (InputFormatError, parse_date,
                                            parse_float, parse_int)

T = TypeVar("T")

CHOICE_PROMPT = "Please make your choice: "


class EndOfInput(Exception):
    """The input stream is exhausted."""


class LineInput:
    """
    Reads console lines. Typed readers keep asking until the value parses.
    """

    def __init__(self, stream: Optional[TextIO] = None, out: Optional[TextIO] = None):
        self._stream = stream
        self._out = out

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdin

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    def read_line(self, prompt: str = "") -> str:
        if prompt:
            self.out.write(prompt)
            self.out.flush()
        line = self.stream.readline()
        if line == "":
            raise EndOfInput()
        return line.rstrip("\r\n")

    def read_int(self, prompt: str = CHOICE_PROMPT) -> int:
        return self._read_parsed(prompt, parse_int)

    def read_float(self, prompt: str = "") -> float:
        return self._read_parsed(prompt, parse_float)

    def read_date(self, prompt: str = "") -> date:
        return self._read_parsed(prompt, parse_date)

    def _read_parsed(self, prompt: str, parser: Callable[[str], T]) -> T:
        while True:
            value = self.read_line(prompt)
            try:
                return parser(value)
            except InputFormatError:
                print(ERROR_INVALID_INPUT, file=self.out)
