import os

if os.getenv("ENV", "DEV") in ["DEV", "TEST"]:
    from dotenv import load_dotenv

    load_dotenv(os.getenv("ENV_FILE", ".env"))


class Config:
    LOG_LEVEL = os.getenv("LOG_LEVEL", "WARNING")
    LOG_FILE = os.getenv("LOG_FILE")

    # connection; dbname, port and user come from the command line
    DB_DRIVER = os.getenv("DB_DRIVER", "postgresql+psycopg2")
    DB_HOST = os.getenv("DB_HOST", "localhost")
    DB_PASSWORD = os.getenv("DB_PASSWORD", "")
    DB_ECHO = os.getenv("DB_ECHO", "false").lower() == "true"
    INIT_SCHEMA = os.getenv("INIT_SCHEMA", "false").lower() == "true"

    HOTEL_RADIUS = float(os.getenv("HOTEL_RADIUS", "30"))
    RECENT_LIMIT = int(os.getenv("RECENT_LIMIT", "5"))
    USER_ID_SEQUENCE = os.getenv("USER_ID_SEQUENCE", "users_userid_seq")
