import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

# Name of the variable holding a serialized service account key
SERVICE_ACCOUNT_ENV = "FIREBASE_SERVICE_ACCOUNT_KEY"

DEFAULT_PROJECT_ID = "hacklite-9c06e"
# Relative to the directory the script is run from
DEFAULT_CREDENTIALS_PATH = "service-account-key.json"


class SeedConfig(BaseModel):
    project_id: str = DEFAULT_PROJECT_ID
    api_key: Optional[str] = None
    credentials_path: str = DEFAULT_CREDENTIALS_PATH
    service_account_env: str = SERVICE_ACCOUNT_ENV
    # None means the datasets bundled in the seed_data package
    data_dir: Optional[str] = None


def load_config() -> SeedConfig:
    """Build the run configuration from the environment (and a local .env, if any)."""
    load_dotenv()
    return SeedConfig(
        project_id=os.getenv("FIREBASE_PROJECT_ID", DEFAULT_PROJECT_ID),
        api_key=os.getenv("FIREBASE_API_KEY") or None,
        credentials_path=os.getenv("FIREBASE_CREDENTIALS_PATH", DEFAULT_CREDENTIALS_PATH),
        data_dir=os.getenv("SEED_DATA_DIR") or None,
    )
