from sqlalchemy import (DDL, Boolean, Column, Date, DateTime, Float, ForeignKey,
                        ForeignKeyConstraint, Integer, Numeric, String, Text, event,
                        text)
from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Lowercase names so that the unquoted identifiers in the query text
# resolve the same way on PostgreSQL and SQLite.


class User(Base):
    __tablename__ = "users"

    user_id = Column("userid", Integer, primary_key=True, autoincrement=True)
    name = Column("name", String(50), nullable=False)
    password = Column("password", String(30), nullable=False)
    user_type = Column("usertype", String(10), nullable=False, server_default="customer")


class Hotel(Base):
    __tablename__ = "hotel"

    hotel_id = Column("hotelid", Integer, primary_key=True, autoincrement=True)
    hotel_name = Column("hotelname", String(50), nullable=False)
    latitude = Column("latitude", Float, nullable=False)
    longitude = Column("longitude", Float, nullable=False)
    date_established = Column("dateestablished", Date, nullable=True)
    manager_user_id = Column("manageruserid", Integer, ForeignKey("users.userid"), nullable=False)


class Room(Base):
    __tablename__ = "rooms"

    hotel_id = Column("hotelid", Integer, ForeignKey("hotel.hotelid"), primary_key=True)
    room_number = Column("roomnumber", Integer, primary_key=True)
    price = Column("price", Numeric(10, 2), nullable=False)
    image_url = Column("imageurl", Text, nullable=True)


class RoomBooking(Base):
    __tablename__ = "roombookings"
    __table_args__ = (
        ForeignKeyConstraint(["hotelid", "roomnumber"], ["rooms.hotelid", "rooms.roomnumber"]),
    )

    booking_id = Column("bookingid", Integer, primary_key=True, autoincrement=True)
    customer_id = Column("customerid", Integer, ForeignKey("users.userid"), nullable=False)
    hotel_id = Column("hotelid", Integer, nullable=False)
    room_number = Column("roomnumber", Integer, nullable=False)
    booking_date = Column("bookingdate", Date, nullable=False)


class RoomUpdateLog(Base):
    __tablename__ = "roomupdateslog"

    update_number = Column("updatenumber", Integer, primary_key=True, autoincrement=True)
    manager_id = Column("managerid", Integer, ForeignKey("users.userid"), nullable=False)
    hotel_id = Column("hotelid", Integer, nullable=False)
    room_number = Column("roomnumber", Integer, nullable=False)
    updated_on = Column("updatedon", DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP"))


class MaintenanceCompany(Base):
    __tablename__ = "maintenancecompany"

    company_id = Column("companyid", Integer, primary_key=True, autoincrement=True)
    name = Column("name", String(50), nullable=False)
    address = Column("address", Text, nullable=True)
    is_certified = Column("iscertified", Boolean, nullable=False, server_default=text("false"))


class RoomRepair(Base):
    __tablename__ = "roomrepairs"

    repair_id = Column("repairid", Integer, primary_key=True, autoincrement=True)
    company_id = Column("companyid", Integer, nullable=False)
    hotel_id = Column("hotelid", Integer, nullable=False)
    room_number = Column("roomnumber", Integer, nullable=False)
    repair_date = Column("repairdate", DateTime, nullable=False, server_default=text("CURRENT_TIMESTAMP"))


class RoomRepairRequest(Base):
    __tablename__ = "roomrepairrequests"

    # no column links a request to its RoomRepairs row
    request_number = Column("requestnumber", Integer, primary_key=True, autoincrement=True)
    manager_id = Column("managerid", Integer, ForeignKey("users.userid"), nullable=False)
    company_id = Column("companyid", Integer, nullable=False)


event.listen(
    Base.metadata,
    "after_create",
    DDL(
        "CREATE OR REPLACE FUNCTION calculate_distance("
        "lat1 float8, long1 float8, lat2 float8, long2 float8) "
        "RETURNS float8 AS $$ "
        "SELECT sqrt((lat1 - lat2) ^ 2 + (long1 - long2) ^ 2) "
        "$$ LANGUAGE SQL IMMUTABLE"
    ).execute_if(dialect="postgresql"),
)


def create_schema(client) -> None:
    """Create any missing tables on the client's connection."""
    Base.metadata.create_all(client.connection)
    client.connection.commit()
