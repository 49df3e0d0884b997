import io

from hotel_console.cli.presenter import Presenter
from hotel_console.database import ResultTable, to_cell


def test_render_empty_table_is_header_and_count():
    table = ResultTable(columns=["Hotel_ID", "Hotel_Name"], rows=[])

    assert Presenter.render(table) == ["Hotel_ID\tHotel_Name", "Total row(s): 0"]


def test_render_rows_tab_separated_with_nulls_blank():
    table = ResultTable(columns=["a", "b", "c"], rows=[["1", None, "x"], ["2", "y", None]])

    assert Presenter.render(table) == [
        "a\tb\tc",
        "1\t\tx",
        "2\ty\t",
        "Total row(s): 2",
    ]


def test_show_writes_to_stream():
    out = io.StringIO()
    table = ResultTable(columns=["Price"], rows=[["100"]])

    Presenter(out=out).show(table)

    assert out.getvalue() == "Price\n100\nTotal row(s): 1\n"


def test_say_writes_a_line():
    out = io.StringIO()

    Presenter(out=out).say("Room Booked")

    assert out.getvalue() == "Room Booked\n"


def test_table_helpers():
    table = ResultTable(columns=["id", "name"], rows=[["1", "Inn"], ["2", None]])

    assert table.row_count == 2
    assert table.scalar() == "1"
    assert table.column("name") == ["Inn", None]
    assert ResultTable(columns=["id"]).scalar() is None


def test_to_cell_formats_driver_values():
    from datetime import date, datetime
    from decimal import Decimal

    assert to_cell(None) is None
    assert to_cell(Decimal("12.50")) == "12.50"
    assert to_cell(date(2025, 1, 1)) == "2025-01-01"
    assert to_cell(datetime(2025, 1, 1, 8, 30)) == "2025-01-01 08:30:00"
    assert to_cell(7) == "7"
