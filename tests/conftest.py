import io
from datetime import date

import pytest

from hotel_console.cli.line_input import LineInput
from hotel_console.cli.presenter import Presenter
from hotel_console.database.db import DatabaseClient
from hotel_console.database.models import (Hotel, MaintenanceCompany, Room,
                                           RoomBooking, User, create_schema)
from hotel_console.services.query_service import QueryService
from hotel_console.session.controller import SessionController

# userType values are padded / mixed case on purpose, like char(10) columns
USERS = [
    {"userid": 1, "name": "Manny", "password": "mpw", "usertype": "manager   "},
    {"userid": 2, "name": "Marge", "password": "mpw2", "usertype": "Manager"},
    {"userid": 3, "name": "Ada", "password": "apw", "usertype": "admin     "},
    {"userid": 4, "name": "Cole", "password": "cpw", "usertype": "customer  "},
    {"userid": 5, "name": "Dana", "password": "dpw", "usertype": "customer"},
    {"userid": 6, "name": "Odd", "password": "opw", "usertype": "janitor"},
]

HOTELS = [
    {"hotelid": 1, "hotelname": "Harbor Inn", "latitude": 0.0, "longitude": 0.0,
     "dateestablished": date(2001, 5, 1), "manageruserid": 1},
    {"hotelid": 2, "hotelname": "Edge House", "latitude": 30.0, "longitude": 0.0,
     "dateestablished": date(1999, 1, 1), "manageruserid": 2},
    {"hotelid": 3, "hotelname": "Far Lodge", "latitude": 30.0001, "longitude": 0.0,
     "dateestablished": None, "manageruserid": 2},
    {"hotelid": 4, "hotelname": "Admin Suites", "latitude": 50.0, "longitude": 50.0,
     "dateestablished": date(2010, 7, 4), "manageruserid": 3},
]

ROOMS = [
    {"hotelid": 1, "roomnumber": 101, "price": 100, "imageurl": "http://img/101"},
    {"hotelid": 1, "roomnumber": 102, "price": 150, "imageurl": "http://img/102"},
    {"hotelid": 2, "roomnumber": 201, "price": 80, "imageurl": None},
    {"hotelid": 4, "roomnumber": 401, "price": 300, "imageurl": None},
]

BOOKINGS = [
    {"customerid": 4, "hotelid": 1, "roomnumber": 102, "bookingdate": date(2025, 1, 1)},
]

COMPANIES = [
    {"companyid": 1, "name": "FixIt", "address": "1 Main St", "iscertified": True},
]


def seed(client: DatabaseClient) -> None:
    connection = client.connection
    connection.execute(User.__table__.insert(), USERS)
    connection.execute(Hotel.__table__.insert(), HOTELS)
    connection.execute(Room.__table__.insert(), ROOMS)
    connection.execute(RoomBooking.__table__.insert(), BOOKINGS)
    connection.execute(MaintenanceCompany.__table__.insert(), COMPANIES)
    connection.commit()


def count_rows(client: DatabaseClient, table: str) -> int:
    return int(client.execute_read(f"SELECT COUNT(*) FROM {table}").scalar())


@pytest.fixture
def client():
    client = DatabaseClient.from_url("sqlite://")
    create_schema(client)
    seed(client)
    yield client
    client.close()


@pytest.fixture
def queries(client):
    return QueryService(client, radius=30, recent_limit=5, user_id_sequence="users_userid_seq")


@pytest.fixture
def make_controller(queries):
    """
    Build a controller whose console input is the given lines.
    Returns (controller, out, err).
    """
    def factory(*lines):
        out, err = io.StringIO(), io.StringIO()
        stream = io.StringIO("".join(f"{line}\n" for line in lines))
        controller = SessionController(
            queries=queries,
            line_input=LineInput(stream=stream, out=out),
            presenter=Presenter(out=out),
            err=err,
        )
        return controller, out, err
    return factory
