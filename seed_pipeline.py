import logging
import os
import sys
from typing import Iterable, Optional

from bulk_loader import QUIZZES_COLLECTION, upload_quiz
from credential_resolver import CredentialStrategy, StoreHandle, resolve_credentials
from seed_config import SeedConfig
from seed_errors import (
    NoCredentialAvailable,
    SeedError,
    UploadInterrupted,
    classify_store_error,
    guidance_for,
)
from seed_models import QuizDataset, load_bundled_dataset, load_dataset

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_CREDENTIAL = 1
EXIT_BAD_DATASET = 1


def configure_logging(level: int = logging.INFO) -> None:
    logging.basicConfig(level=level, format="%(message)s", stream=sys.stdout)


def _report_store_error(exc: BaseException) -> None:
    kind = classify_store_error(exc)
    logger.error(f"❌ {kind.value}: {exc}")
    guidance = guidance_for(kind)
    if guidance:
        logger.info("\n" + guidance)


def _authenticate(strategies: Iterable[CredentialStrategy]) -> Optional[StoreHandle]:
    logger.info("🚀 Initializing Firebase...")
    try:
        return resolve_credentials(strategies)
    except SeedError as e:
        logger.error(f"❌ {e}")
        if e.guidance:
            logger.info("\n" + e.guidance)
        if isinstance(e, NoCredentialAvailable):
            raise
    except Exception as e:
        logger.error(f"❌ Failed to initialize Firebase: {e}")
        _report_store_error(e)
    return None


def run_upload(strategies: Iterable[CredentialStrategy], dataset: QuizDataset, mode: Optional[str] = None) -> int:
    """Authenticate, upload one quiz with its questions, and report the outcome.

    Returns the process exit code: non-zero only when no credential was found.
    """
    try:
        handle = _authenticate(strategies)
    except NoCredentialAvailable:
        return EXIT_NO_CREDENTIAL
    if handle is None:
        return EXIT_OK

    try:
        logger.info(f"📝 Preparing {len(dataset.questions)} quiz questions: {dataset.quiz.title}")
        result = upload_quiz(handle.store, dataset, mode=mode)
        logger.info("🎉 Successfully uploaded all quiz questions!")
        logger.info(f"📊 Total questions uploaded: {result.written}")
        logger.info(f"🆔 Quiz ID: {result.quiz_id}")
    except UploadInterrupted as e:
        where = f" (quiz {e.quiz_id} kept)" if e.quiz_id else ""
        logger.error(f"❌ Error uploading quiz data: {e}{where}")
        _report_store_error(e.__cause__ or e)
    except Exception as e:
        logger.error(f"❌ Error uploading quiz data: {e}")
        _report_store_error(e)
    finally:
        handle.release()
    return EXIT_OK


def run_connection_check(strategies: Iterable[CredentialStrategy]) -> int:
    logger.info("🧪 Testing Firebase connection...")
    try:
        handle = _authenticate(strategies)
    except NoCredentialAvailable:
        return EXIT_NO_CREDENTIAL
    if handle is None:
        return EXIT_OK

    try:
        logger.info("🔗 Testing Firestore connection...")
        docs = handle.store.sample_documents(QUIZZES_COLLECTION, limit=1)
        logger.info("✅ Firebase connection successful!")
        logger.info(f"📊 Found {len(docs)} quiz documents in Firestore")
    except Exception as e:
        logger.error(f"❌ Firebase connection failed: {e}")
        _report_store_error(e)
    finally:
        handle.release()
        logger.info("🧹 Connection test completed")
    return EXIT_OK


def load_seed_dataset(config: SeedConfig, filename: str) -> Optional[QuizDataset]:
    """Read a dataset from SEED_DATA_DIR if set, otherwise the bundled copy; None if unusable."""
    try:
        if config.data_dir:
            return load_dataset(os.path.join(config.data_dir, filename))
        return load_bundled_dataset(filename)
    except (OSError, ValueError) as e:
        # pydantic's ValidationError and json.JSONDecodeError are both ValueErrors
        where = config.data_dir or "bundled seed_data"
        logger.error(f"❌ Could not load dataset {filename} from {where}: {e}")
        return None


def upload_dataset_file(strategies: Iterable[CredentialStrategy], config: SeedConfig, filename: str) -> int:
    dataset = load_seed_dataset(config, filename)
    if dataset is None:
        return EXIT_BAD_DATASET
    return run_upload(strategies, dataset)
