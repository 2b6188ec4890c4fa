import os

# Retrieve enviroment variables from .env file

SECRET_KEY: str = os.environ.get("SECRET_KEY")

BALLOT_ADMIN_ADDRESS = os.environ.get("BALLOT_ADMIN_ADDRESS")
BALLOT_VOTER_GATED_READS = bool(int(os.environ.get("BALLOT_VOTER_GATED_READS", True)))

TIMEZONE = os.environ.get("TIMEZONE", "UTC")

LOGGER_FILE = os.environ.get("LOGGER_FILE")

ORIGINS: list = os.environ.get("ORIGINS", "*").split(",")
