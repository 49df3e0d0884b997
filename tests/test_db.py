import math
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError

from hotel_console.database.db import (DatabaseClient, DatabaseConnectionError,
                                       DatabaseUnavailable, build_database_url,
                                       calculate_distance, open_client)


def test_calculate_distance_is_planar():
    assert calculate_distance(0, 0, 3, 4) == 5.0
    assert calculate_distance(30, 0, 0, 0) == 30.0
    assert calculate_distance(None, 0, 0, 0) is None
    # one degree of longitude counts the same at any latitude
    assert math.isclose(calculate_distance(80, 0, 80, 1), calculate_distance(0, 0, 0, 1))


def test_sql_side_distance_function_is_registered(client):
    value = client.execute_read("SELECT calculate_distance(0, 0, 6, 8)").scalar()

    assert float(value) == 10.0


def test_build_database_url():
    url = build_database_url("localhost", "5432", "hoteldb", "postgres", "")

    assert url.drivername == "postgresql+psycopg2"
    assert url.port == 5432
    assert url.database == "hoteldb"
    assert url.password is None


def test_bad_port_is_a_connection_error():
    with pytest.raises(DatabaseConnectionError):
        DatabaseClient.connect("localhost", "not-a-port", "hoteldb", "postgres")


def test_unreachable_database_is_a_connection_error(tmp_path):
    missing = tmp_path / "missing" / "hotel.db"

    with pytest.raises(DatabaseConnectionError):
        DatabaseClient.from_url(f"sqlite:///{missing}")


def test_execute_count_and_write(client):
    assert client.execute_count("SELECT hotelID FROM Hotel") == 4
    changed = client.execute_write("UPDATE Rooms SET imageURL = :url WHERE hotelID = 1", {"url": "u"})
    assert changed == 2


def test_failed_statement_raises_and_rolls_back(client):
    with pytest.raises(OperationalError):
        client.execute_read("SELECT * FROM no_such_table")

    assert client.execute_count("SELECT userID FROM Users") == 6


def test_close_is_idempotent(client):
    client.close()
    client.close()

    with pytest.raises(DatabaseUnavailable):
        client.execute_read("SELECT 1")


def test_close_swallows_errors(client):
    with patch.object(client.engine, "dispose", side_effect=RuntimeError("boom")):
        client.close()

    assert client._connection is None


def test_open_client_releases_connection(client):
    with patch.object(DatabaseClient, "connect", return_value=client):
        with pytest.raises(RuntimeError):
            with open_client("localhost", 5432, "hoteldb", "postgres") as opened:
                assert opened is client
                raise RuntimeError("operation blew up")

    assert client._connection is None
