import sys
from typing import List, Optional, TextIO

from hotel_console.database import ResultTable

SEPARATOR = "\t"


class Presenter:
    """Writes query results and messages to a text stream."""

    def __init__(self, out: Optional[TextIO] = None):
        self._out = out

    @property
    def out(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    @staticmethod
    def render(table: ResultTable) -> List[str]:
        lines = [SEPARATOR.join(table.columns)]
        for row in table.rows:
            lines.append(SEPARATOR.join("" if cell is None else cell for cell in row))
        lines.append(f"Total row(s): {table.row_count}")
        return lines

    def show(self, table: ResultTable) -> None:
        for line in self.render(table):
            print(line, file=self.out)

    def say(self, message: str) -> None:
        print(message, file=self.out)
