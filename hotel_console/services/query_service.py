import logging
from datetime import date
from typing import Optional

from config import Config
from hotel_console.constants.response_messages import (
    REJECT_ACCESS_DENIED, REJECT_ALREADY_BOOKED, REJECT_HOTEL_NOT_FOUND,
    REJECT_INVALID_CREDENTIALS, REJECT_ROOM_NOT_FOUND, REJECT_UNKNOWN_ROLE,
    REJECT_USER_NOT_FOUND, SUCCESS_REPAIR_REQUESTED, SUCCESS_ROOM_BOOKED,
    SUCCESS_ROOM_UPDATED, SUCCESS_USER_CREATED)
from hotel_console.database import ResultTable
from hotel_console.database.db import DatabaseClient
from hotel_console.utils.authorization import Role, owns_hotel
from hotel_console.utils.helper import (OperationResult, RejectReason,
                                        safe_db_operation)

logger = logging.getLogger(__name__)


def _date_param(value: date) -> str:
    # ISO text binds the same way on every driver
    return value.isoformat()


class QueryService:
    """
    One method per domain operation.

    Every method returns an OperationResult; validation queries run first and
    a rejection means no write was issued.
    """

    def __init__(
        self,
        client: DatabaseClient,
        radius: float = Config.HOTEL_RADIUS,
        recent_limit: int = Config.RECENT_LIMIT,
        user_id_sequence: str = Config.USER_ID_SEQUENCE,
    ):
        self.client = client
        self.radius = radius
        self.recent_limit = recent_limit
        self.user_id_sequence = user_id_sequence

    # -------------------------
    # Users
    # -------------------------

    @safe_db_operation("CreateUser")
    def create_user(self, name: str, password: str) -> OperationResult[int]:
        self.client.execute_write(
            "INSERT INTO Users (name, password, userType) VALUES (:name, :password, :user_type)",
            {"name": name, "password": password, "user_type": Role.CUSTOMER.value},
        )
        user_id = self.client.current_sequence_value(self.user_id_sequence)
        logger.info("Created user %s", user_id)
        return OperationResult.ok(result=user_id, message=SUCCESS_USER_CREATED.format(user_id=user_id))

    @safe_db_operation("LogIn")
    def log_in(self, user_id: int, password: str) -> OperationResult[int]:
        matches = self.client.execute_count(
            "SELECT userID FROM Users WHERE userID = :user_id AND password = :password",
            {"user_id": user_id, "password": password},
        )
        if matches < 1:
            logger.info("Rejected log in for user %s", user_id)
            return OperationResult.rejected(RejectReason.INVALID_CREDENTIALS, REJECT_INVALID_CREDENTIALS)
        return OperationResult.ok(result=user_id)

    @safe_db_operation("GetUserType")
    def get_user_type(self, user_id: int) -> OperationResult[Role]:
        raw = self.client.execute_read(
            "SELECT userType FROM Users WHERE userID = :user_id",
            {"user_id": user_id},
        )
        if raw.is_empty():
            return OperationResult.rejected(
                RejectReason.USER_NOT_FOUND, REJECT_USER_NOT_FOUND.format(user_id=user_id)
            )
        user_type = raw.scalar()
        try:
            role = Role.parse(user_type)
        except ValueError:
            logger.warning("User %s has unrecognized userType %r", user_id, user_type)
            return OperationResult.rejected(
                RejectReason.UNKNOWN_ROLE,
                REJECT_UNKNOWN_ROLE.format(user_id=user_id, user_type=(user_type or "").strip()),
            )
        return OperationResult.ok(result=role)

    # -------------------------
    # Hotels and rooms
    # -------------------------

    @safe_db_operation("ViewHotels")
    def view_hotels(self, latitude: float, longitude: float) -> OperationResult[ResultTable]:
        table = self.client.execute_read(
            """
            SELECT hotelID AS "Hotel_ID",
                   hotelName AS "Hotel_Name",
                   latitude AS "Latitude",
                   longitude AS "Longitude",
                   dateEstablished AS "Date_Established"
            FROM Hotel
            WHERE calculate_distance(latitude, longitude, :lat, :lon) <= :radius
            ORDER BY hotelID
            """,
            {"lat": latitude, "lon": longitude, "radius": self.radius},
        )
        return OperationResult.ok(result=table)

    @safe_db_operation("ViewRooms")
    def view_rooms(self, hotel_id: int, on_date: date) -> OperationResult[ResultTable]:
        table = self.client.execute_read(
            """
            SELECT r.roomNumber AS "Room_Number",
                   r.price AS "Price",
                   CASE WHEN EXISTS (
                       SELECT 1 FROM RoomBookings rb
                       WHERE rb.hotelID = r.hotelID
                         AND rb.roomNumber = r.roomNumber
                         AND rb.bookingDate = :booking_date
                   ) THEN 'Booked' ELSE 'Available' END AS "Availability"
            FROM Rooms r
            WHERE r.hotelID = :hotel_id
            ORDER BY r.roomNumber
            """,
            {"hotel_id": hotel_id, "booking_date": _date_param(on_date)},
        )
        return OperationResult.ok(result=table)

    def _hotel_exists(self, hotel_id: int) -> bool:
        return self.client.execute_count(
            "SELECT hotelID FROM Hotel WHERE hotelID = :hotel_id", {"hotel_id": hotel_id}
        ) > 0

    def _room_exists(self, hotel_id: int, room_number: int) -> bool:
        return self.client.execute_count(
            "SELECT roomNumber FROM Rooms WHERE hotelID = :hotel_id AND roomNumber = :room_number",
            {"hotel_id": hotel_id, "room_number": room_number},
        ) > 0

    def _access_rejection(self, manager_id: int, hotel_id: int) -> Optional[OperationResult]:
        owner = self.client.execute_read(
            "SELECT managerUserID FROM Hotel WHERE hotelID = :hotel_id", {"hotel_id": hotel_id}
        )
        if owner.is_empty():
            return OperationResult.rejected(
                RejectReason.HOTEL_NOT_FOUND, REJECT_HOTEL_NOT_FOUND.format(hotel_id=hotel_id)
            )
        if not owns_hotel(manager_id, owner.scalar()):
            logger.warning("User %s denied access to hotel %s", manager_id, hotel_id)
            return OperationResult.rejected(RejectReason.ACCESS_DENIED, REJECT_ACCESS_DENIED)
        return None

    def _room_rejection(self, hotel_id: int, room_number: int) -> Optional[OperationResult]:
        if not self._room_exists(hotel_id, room_number):
            return OperationResult.rejected(
                RejectReason.ROOM_NOT_FOUND,
                REJECT_ROOM_NOT_FOUND.format(room_number=room_number, hotel_id=hotel_id),
            )
        return None

    @safe_db_operation("CheckHotelAccess")
    def check_hotel_access(self, manager_id: int, hotel_id: int) -> OperationResult[int]:
        rejection = self._access_rejection(manager_id, hotel_id)
        if rejection is not None:
            return rejection
        return OperationResult.ok(result=hotel_id)

    # -------------------------
    # Bookings
    # -------------------------

    @safe_db_operation("BookRoom")
    def book_room(self, hotel_id: int, room_number: int, on_date: date, customer_id: int) -> OperationResult[str]:
        params = {
            "hotel_id": hotel_id,
            "room_number": room_number,
            "booking_date": _date_param(on_date),
            "customer_id": customer_id,
        }
        # order of these checks decides which message the user sees
        already_booked = self.client.execute_count(
            """
            SELECT bookingID FROM RoomBookings
            WHERE hotelID = :hotel_id AND roomNumber = :room_number AND bookingDate = :booking_date
            """,
            params,
        )
        if already_booked > 0:
            return OperationResult.rejected(RejectReason.ALREADY_BOOKED, REJECT_ALREADY_BOOKED)
        if not self._hotel_exists(hotel_id):
            return OperationResult.rejected(
                RejectReason.HOTEL_NOT_FOUND, REJECT_HOTEL_NOT_FOUND.format(hotel_id=hotel_id)
            )
        rejection = self._room_rejection(hotel_id, room_number)
        if rejection is not None:
            return rejection

        self.client.execute_write(
            """
            INSERT INTO RoomBookings (customerID, hotelID, roomNumber, bookingDate)
            VALUES (:customer_id, :hotel_id, :room_number, :booking_date)
            """,
            params,
        )
        logger.info("User %s booked room %s at hotel %s for %s", customer_id, room_number, hotel_id, on_date)
        price = self.client.execute_read(
            "SELECT price FROM Rooms WHERE hotelID = :hotel_id AND roomNumber = :room_number",
            params,
        ).scalar()
        return OperationResult.ok(result=price, message=SUCCESS_ROOM_BOOKED)

    @safe_db_operation("RecentBookings")
    def recent_bookings(self, customer_id: int) -> OperationResult[ResultTable]:
        table = self.client.execute_read(
            """
            SELECT rb.hotelID AS "Hotel_ID",
                   rb.roomNumber AS "Room_Number",
                   r.price AS "Price",
                   rb.bookingDate AS "Booking_Date"
            FROM RoomBookings rb
            JOIN Rooms r ON rb.hotelID = r.hotelID AND rb.roomNumber = r.roomNumber
            WHERE rb.customerID = :customer_id
            ORDER BY rb.bookingDate DESC, rb.bookingID DESC
            LIMIT :limit
            """,
            {"customer_id": customer_id, "limit": self.recent_limit},
        )
        return OperationResult.ok(result=table)

    @safe_db_operation("BookingHistory")
    def booking_history(self, manager_id: int, start: date, end: date) -> OperationResult[ResultTable]:
        table = self.client.execute_read(
            """
            SELECT rb.bookingID AS "Booking_ID",
                   u.name AS "Customer_Name",
                   rb.hotelID AS "Hotel_ID",
                   rb.roomNumber AS "Room_Number",
                   rb.bookingDate AS "Booking_Date"
            FROM RoomBookings rb
            JOIN Users u ON rb.customerID = u.userID
            JOIN Hotel h ON h.hotelID = rb.hotelID
            WHERE h.managerUserID = :manager_id
              AND rb.bookingDate >= :start_date
              AND rb.bookingDate <= :end_date
            ORDER BY rb.bookingDate DESC, rb.bookingID DESC
            """,
            {"manager_id": manager_id, "start_date": _date_param(start), "end_date": _date_param(end)},
        )
        return OperationResult.ok(result=table)

    @safe_db_operation("RegularCustomers")
    def regular_customers(self, manager_id: int, hotel_id: int) -> OperationResult[ResultTable]:
        rejection = self._access_rejection(manager_id, hotel_id)
        if rejection is not None:
            return rejection
        table = self.client.execute_read(
            """
            SELECT u.name AS "Customer_Name", COUNT(*) AS "Bookings"
            FROM Users u
            JOIN RoomBookings rb ON rb.customerID = u.userID
            WHERE rb.hotelID = :hotel_id AND LOWER(TRIM(u.userType)) = :customer
            GROUP BY u.userID, u.name
            ORDER BY COUNT(*) DESC, u.name
            LIMIT :limit
            """,
            {"hotel_id": hotel_id, "customer": Role.CUSTOMER.value, "limit": self.recent_limit},
        )
        return OperationResult.ok(result=table)

    # -------------------------
    # Room maintenance
    # -------------------------

    @safe_db_operation("UpdateRoomInfo")
    def update_room_info(
        self, manager_id: int, hotel_id: int, room_number: int, price: float, image_url: str
    ) -> OperationResult[None]:
        rejection = self._access_rejection(manager_id, hotel_id) or self._room_rejection(hotel_id, room_number)
        if rejection is not None:
            return rejection

        params = {
            "manager_id": manager_id,
            "hotel_id": hotel_id,
            "room_number": room_number,
            "price": price,
            "image_url": image_url,
        }
        self.client.execute_write(
            """
            UPDATE Rooms SET price = :price, imageURL = :image_url
            WHERE hotelID = :hotel_id AND roomNumber = :room_number
            """,
            params,
        )
        self.client.execute_write(
            """
            INSERT INTO RoomUpdatesLog (managerID, hotelID, roomNumber, updatedOn)
            VALUES (:manager_id, :hotel_id, :room_number, CURRENT_TIMESTAMP)
            """,
            params,
        )
        logger.info("User %s updated room %s at hotel %s", manager_id, room_number, hotel_id)
        return OperationResult.ok(message=SUCCESS_ROOM_UPDATED)

    @safe_db_operation("RecentUpdates")
    def recent_updates(self, manager_id: int) -> OperationResult[ResultTable]:
        table = self.client.execute_read(
            """
            SELECT updateNumber AS "Update_Number",
                   hotelID AS "Hotel_ID",
                   roomNumber AS "Room_Number",
                   updatedOn AS "Updated_On"
            FROM RoomUpdatesLog
            WHERE managerID = :manager_id
            ORDER BY updatedOn DESC, updateNumber DESC
            LIMIT :limit
            """,
            {"manager_id": manager_id, "limit": self.recent_limit},
        )
        return OperationResult.ok(result=table)

    @safe_db_operation("PlaceRepairRequest")
    def place_repair_request(
        self, manager_id: int, hotel_id: int, room_number: int, company_id: int
    ) -> OperationResult[None]:
        rejection = self._access_rejection(manager_id, hotel_id) or self._room_rejection(hotel_id, room_number)
        if rejection is not None:
            return rejection

        params = {
            "manager_id": manager_id,
            "hotel_id": hotel_id,
            "room_number": room_number,
            "company_id": company_id,
        }
        # two independent statements; the second can fail after the first committed
        self.client.execute_write(
            """
            INSERT INTO RoomRepairs (companyID, hotelID, roomNumber, repairDate)
            VALUES (:company_id, :hotel_id, :room_number, CURRENT_TIMESTAMP)
            """,
            params,
        )
        self.client.execute_write(
            "INSERT INTO RoomRepairRequests (managerID, companyID) VALUES (:manager_id, :company_id)",
            params,
        )
        logger.info("User %s requested repair of room %s at hotel %s", manager_id, room_number, hotel_id)
        return OperationResult.ok(message=SUCCESS_REPAIR_REQUESTED)

    @safe_db_operation("RepairHistory")
    def repair_history(self, manager_id: int) -> OperationResult[ResultTable]:
        table = self.client.execute_read(
            """
            SELECT rp.companyID AS "Company_ID",
                   rp.hotelID AS "Hotel_ID",
                   rp.roomNumber AS "Room_Number",
                   rp.repairDate AS "Repair_Date"
            FROM RoomRepairs rp
            JOIN Hotel h ON h.hotelID = rp.hotelID
            WHERE h.managerUserID = :manager_id
            ORDER BY rp.repairDate DESC, rp.repairID DESC
            """,
            {"manager_id": manager_id},
        )
        return OperationResult.ok(result=table)
