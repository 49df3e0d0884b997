from datetime import date, datetime
from decimal import Decimal
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict
from sqlalchemy.engine import CursorResult


def to_cell(value: Any) -> Optional[str]:
    """
    Convert a raw driver value into a table cell.
    None stays None so the presenter can decide how to show it.
    """
    if value is None:
        return None
    if isinstance(value, (date, datetime)):
        return value.isoformat(sep=" ") if isinstance(value, datetime) else value.isoformat()
    if isinstance(value, Decimal):
        return format(value, "f")
    return str(value)


class ResultTable(BaseModel):
    columns: List[str]
    rows: List[List[Optional[str]]] = []

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_result(cls, result: CursorResult) -> "ResultTable":
        columns = [str(key) for key in result.keys()]
        rows = [[to_cell(value) for value in row] for row in result.fetchall()]
        return cls(columns=columns, rows=rows)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def is_empty(self) -> bool:
        return not self.rows

    def scalar(self) -> Optional[str]:
        """First cell of the first row, or None for an empty table."""
        if not self.rows or not self.rows[0]:
            return None
        return self.rows[0][0]

    def column(self, name: str) -> List[Optional[str]]:
        index = self.columns.index(name)
        return [row[index] for row in self.rows]
