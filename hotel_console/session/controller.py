import logging
import sys
from typing import Dict, List, Optional, TextIO

from hotel_console.cli.line_input import EndOfInput, LineInput
from hotel_console.cli.presenter import Presenter
from hotel_console.constants.response_messages import (
    ERROR_CONNECTION_LOST, ERROR_UNEXPECTED_FAILURE, ERROR_UNRECOGNIZED_CHOICE, SUCCESS,
    SUCCESS_LOGGED_IN, SUCCESS_LOGGED_OUT, SUCCESS_ROOM_PRICE)
from hotel_console.database import ResultTable
from hotel_console.database.db import DatabaseUnavailable
from hotel_console.services.query_service import QueryService
from hotel_console.session.schema import (DispatchResult, MenuItem, Outcome,
                                          Session, SessionState)
from hotel_console.utils.helper import OperationResult
from hotel_console.utils.validators import (InputFormatError,
                                            validate_not_blank,
                                            validate_positive_id,
                                            validate_user_id)

logger = logging.getLogger(__name__)

EXIT_CHOICE = 9
LOG_OUT_CHOICE = 20

ANONYMOUS_MENU = [
    MenuItem(choice=1, label="Create user", action="create_user"),
    MenuItem(choice=2, label="Log in", action="log_in"),
    MenuItem(choice=EXIT_CHOICE, label="< EXIT", action="exit"),
]

CUSTOMER_ITEMS = [
    MenuItem(choice=1, label="View Hotels within {radius:g} units", action="view_hotels"),
    MenuItem(choice=2, label="View Rooms", action="view_rooms"),
    MenuItem(choice=3, label="Book a Room", action="book_room"),
    MenuItem(choice=4, label="View recent booking history", action="recent_bookings"),
]

MANAGER_ITEMS = [
    MenuItem(choice=5, label="Update Room Information", action="update_room_info"),
    MenuItem(choice=6, label="View {limit} recent Room Updates Info", action="recent_updates"),
    MenuItem(choice=7, label="View booking history of the hotel", action="booking_history"),
    MenuItem(choice=8, label="View {limit} regular Customers", action="regular_customers"),
    MenuItem(choice=9, label="Place room repair Request to a company", action="place_repair_request"),
    MenuItem(choice=10, label="View room repair Requests history", action="repair_history"),
]

LOG_OUT_ITEM = MenuItem(choice=LOG_OUT_CHOICE, label="Log out", action="log_out")

MENUS: Dict[SessionState, List[MenuItem]] = {
    SessionState.ANONYMOUS: ANONYMOUS_MENU,
    SessionState.CUSTOMER: CUSTOMER_ITEMS + [LOG_OUT_ITEM],
    SessionState.MANAGER_OR_ADMIN: CUSTOMER_ITEMS + MANAGER_ITEMS + [LOG_OUT_ITEM],
}


class SessionController:
    """
    Maps (session, menu choice) to one operation.

    The controller keeps no identity of its own: the caller passes the current
    Session in and gets the next one back in the DispatchResult.
    """

    def __init__(
        self,
        queries: QueryService,
        line_input: LineInput,
        presenter: Presenter,
        err: Optional[TextIO] = None,
    ):
        self.queries = queries
        self.input = line_input
        self.presenter = presenter
        self._err = err

    @property
    def err(self) -> TextIO:
        return self._err if self._err is not None else sys.stderr

    def menu(self, session: Session) -> List[MenuItem]:
        return MENUS[session.state]

    def menu_lines(self, session: Session) -> List[str]:
        lines = ["MAIN MENU", "---------"]
        for item in self.menu(session):
            if item.choice == LOG_OUT_CHOICE:
                lines.append(".........................")
            label = item.label.format(radius=self.queries.radius, limit=self.queries.recent_limit)
            lines.append(f"{item.choice}. {label}")
        return lines

    def handle(self, session: Session, choice: int) -> DispatchResult:
        item = {entry.choice: entry for entry in self.menu(session)}.get(choice)
        if item is None:
            self.presenter.say(ERROR_UNRECOGNIZED_CHOICE)
            return DispatchResult(session=session, outcome=Outcome.NOT_RECOGNIZED, message=ERROR_UNRECOGNIZED_CHOICE)

        handler = getattr(self, f"_do_{item.action}")
        try:
            return handler(session)
        except InputFormatError as e:
            print(str(e), file=self.err)
            return DispatchResult(session=session, outcome=Outcome.INVALID_INPUT, message=str(e))
        except DatabaseUnavailable as e:
            message = ERROR_CONNECTION_LOST.format(error=e)
            logger.error(message)
            print(message, file=self.err)
            return DispatchResult(session=session, outcome=Outcome.FAILED, message=message)
        except EndOfInput:
            raise
        except Exception as e:
            logger.exception("[%s] Unhandled Exception: %s", item.action, e)
            message = ERROR_UNEXPECTED_FAILURE.format(error=e)
            print(message, file=self.err)
            return DispatchResult(session=session, outcome=Outcome.FAILED, message=message)

    def _report(self, session: Session, outcome: OperationResult) -> DispatchResult:
        if outcome.is_success:
            if isinstance(outcome.result, ResultTable):
                self.presenter.show(outcome.result)
            if outcome.message != SUCCESS:
                self.presenter.say(outcome.message)
            return DispatchResult(session=session, outcome=Outcome.OK, message=outcome.message)
        if outcome.is_fault:
            print(outcome.message, file=self.err)
            return DispatchResult(session=session, outcome=Outcome.FAILED, message=outcome.message)
        self.presenter.say(outcome.message)
        return DispatchResult(session=session, outcome=Outcome.REJECTED, message=outcome.message)

    def _read_id(self, prompt: str, field: str) -> int:
        return validate_positive_id(self.input.read_int(prompt), field)

    # -------------------------
    # Anonymous
    # -------------------------

    def _do_create_user(self, session: Session) -> DispatchResult:
        name = validate_not_blank(self.input.read_line("\tEnter name: "), "name")
        password = validate_not_blank(self.input.read_line("\tEnter password: "), "password")
        return self._report(session, self.queries.create_user(name.strip(), password))

    def _do_log_in(self, session: Session) -> DispatchResult:
        user_id = validate_user_id(self.input.read_int("\tEnter userID: "))
        password = self.input.read_line("\tEnter password: ")
        login = self.queries.log_in(user_id, password)
        if not login.is_success:
            return self._report(session, login)
        role = self.queries.get_user_type(user_id)
        if not role.is_success:
            return self._report(session, role)
        authenticated = Session.authenticated(user_id, role.result)
        message = SUCCESS_LOGGED_IN.format(user_id=user_id, role=role.result.value)
        self.presenter.say(message)
        return DispatchResult(session=authenticated, outcome=Outcome.OK, message=message)

    def _do_exit(self, session: Session) -> DispatchResult:
        return DispatchResult(session=session, outcome=Outcome.EXIT)

    # -------------------------
    # Any authenticated user
    # -------------------------

    def _do_log_out(self, session: Session) -> DispatchResult:
        self.presenter.say(SUCCESS_LOGGED_OUT)
        return DispatchResult(session=Session.anonymous(), outcome=Outcome.OK, message=SUCCESS_LOGGED_OUT)

    def _do_view_hotels(self, session: Session) -> DispatchResult:
        latitude = self.input.read_float("\tEnter Latitude: ")
        longitude = self.input.read_float("\tEnter Longitude: ")
        return self._report(session, self.queries.view_hotels(latitude, longitude))

    def _do_view_rooms(self, session: Session) -> DispatchResult:
        hotel_id = self._read_id("\tEnter HotelId: ", "hotelID")
        on_date = self.input.read_date("\tEnter Date(Month/Day/Year): ")
        return self._report(session, self.queries.view_rooms(hotel_id, on_date))

    def _do_book_room(self, session: Session) -> DispatchResult:
        hotel_id = self._read_id("\tEnter HotelId: ", "hotelID")
        room_number = self._read_id("\tEnter Room Number: ", "roomNumber")
        on_date = self.input.read_date("\tEnter Date(Month/Day/Year) of your stay: ")
        booking = self.queries.book_room(hotel_id, room_number, on_date, session.user_id)
        result = self._report(session, booking)
        if booking.is_success:
            self.presenter.say(SUCCESS_ROOM_PRICE.format(price=booking.result))
        return result

    def _do_recent_bookings(self, session: Session) -> DispatchResult:
        return self._report(session, self.queries.recent_bookings(session.user_id))

    # -------------------------
    # Managers and admins
    # -------------------------

    def _read_owned_hotel(self, session: Session):
        """Ask for a hotel and check ownership before asking anything else."""
        hotel_id = self._read_id("\tEnter hotel ID: ", "hotelID")
        access = self.queries.check_hotel_access(session.user_id, hotel_id)
        return hotel_id, access

    def _do_update_room_info(self, session: Session) -> DispatchResult:
        hotel_id, access = self._read_owned_hotel(session)
        if not access.is_success:
            return self._report(session, access)
        room_number = self._read_id("\tEnter room number: ", "roomNumber")
        price = self.input.read_float("\tEnter new price: ")
        image_url = self.input.read_line("\tEnter new URL: ").strip()
        return self._report(
            session, self.queries.update_room_info(session.user_id, hotel_id, room_number, price, image_url)
        )

    def _do_recent_updates(self, session: Session) -> DispatchResult:
        return self._report(session, self.queries.recent_updates(session.user_id))

    def _do_booking_history(self, session: Session) -> DispatchResult:
        start = self.input.read_date("\tEnter start date of bookings: ")
        end = self.input.read_date("\tEnter end date of bookings: ")
        return self._report(session, self.queries.booking_history(session.user_id, start, end))

    def _do_regular_customers(self, session: Session) -> DispatchResult:
        hotel_id = self._read_id("\tEnter hotel ID: ", "hotelID")
        return self._report(session, self.queries.regular_customers(session.user_id, hotel_id))

    def _do_place_repair_request(self, session: Session) -> DispatchResult:
        hotel_id, access = self._read_owned_hotel(session)
        if not access.is_success:
            return self._report(session, access)
        room_number = self._read_id("\tEnter room number: ", "roomNumber")
        company_id = self._read_id("\tEnter company ID: ", "companyID")
        return self._report(
            session, self.queries.place_repair_request(session.user_id, hotel_id, room_number, company_id)
        )

    def _do_repair_history(self, session: Session) -> DispatchResult:
        return self._report(session, self.queries.repair_history(session.user_id))
