# USER FACING MESSAGES

# Input
ERROR_INVALID_INPUT = "Your input is invalid!"
ERROR_INVALID_INTEGER = "'{value}' is not a whole number"
ERROR_INVALID_NUMBER = "'{value}' is not a number"
ERROR_INVALID_DATE = "'{value}' is not a date in Month/Day/Year format"
ERROR_EMPTY_VALUE = "{field} must not be empty"
ERROR_NON_POSITIVE_ID = "{field} must be a positive, non-zero integer"
ERROR_UNRECOGNIZED_CHOICE = "Unrecognized choice!"

# Database
ERROR_CONNECTION_FAILED = "Error - Unable to Connect to Database: {error}"
ERROR_CONNECTION_HINT = "Make sure you started postgres on this machine"
ERROR_CONNECTION_LOST = "Database connection unavailable: {error}"
ERROR_DATABASE_QUERY_FAILURE = "Database error occurred: {error}"
ERROR_UNEXPECTED_FAILURE = "Something went wrong: {error}"

# Rejections
REJECT_INVALID_CREDENTIALS = "Invalid userID or password."
REJECT_USER_NOT_FOUND = "User {user_id} does not exist."
REJECT_UNKNOWN_ROLE = "User {user_id} has an unrecognized user type '{user_type}'."
REJECT_ALREADY_BOOKED = "Room is already booked."
REJECT_HOTEL_NOT_FOUND = "Hotel {hotel_id} does not exist."
REJECT_ROOM_NOT_FOUND = "Room {room_number} does not exist in hotel {hotel_id}."
REJECT_ACCESS_DENIED = "Don't have access to this hotel."

# Success
SUCCESS_USER_CREATED = "User successfully created with userID = {user_id}"
SUCCESS_LOGGED_IN = "Logged in as user {user_id} ({role})."
SUCCESS_LOGGED_OUT = "Logged out."
SUCCESS_ROOM_BOOKED = "Room Booked"
SUCCESS_ROOM_PRICE = "Price: {price}"
SUCCESS_ROOM_UPDATED = "Room updated!"
SUCCESS_REPAIR_REQUESTED = "Room repair request sent"
SUCCESS = "Success"

# CLI
USAGE = "Usage: hotel-console <dbname> <port> <user>"
GREETING = (
    "\n\n*******************************************************\n"
    "              User Interface\n"
    "*******************************************************\n"
)
CONNECTING = "Connecting to database..."
DISCONNECTING = "Disconnecting from database..."
GOODBYE = "Done\n\nBye !"
