# check_connection.py: verify credentials and read access to the quizzes collection
import sys

from credential_resolver import admin_strategies
from seed_config import load_config
from seed_pipeline import configure_logging, run_connection_check


def main():
    configure_logging()
    sys.exit(run_connection_check(admin_strategies(load_config())))


if __name__ == "__main__":
    main()
