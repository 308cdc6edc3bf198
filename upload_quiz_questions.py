# upload_quiz_questions.py: Admin SDK upload, questions committed in batches of 10
import sys

from credential_resolver import admin_strategies
from seed_config import load_config
from seed_pipeline import configure_logging, upload_dataset_file

DATASET_FILE = "accessibility_quiz.json"


def main():
    configure_logging()
    config = load_config()
    sys.exit(upload_dataset_file(admin_strategies(config), config, DATASET_FILE))


if __name__ == "__main__":
    main()
