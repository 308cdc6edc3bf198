# upload_asl_quiz.py: ASL sign recognition quiz (image questions), client-style upload
import sys

from credential_resolver import client_strategies
from seed_config import load_config
from seed_pipeline import configure_logging, upload_dataset_file

DATASET_FILE = "asl_quiz.json"


def main():
    configure_logging()
    config = load_config()
    sys.exit(upload_dataset_file(client_strategies(config), config, DATASET_FILE))


if __name__ == "__main__":
    main()
