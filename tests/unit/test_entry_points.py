"""The zero-argument scripts wire the right strategy chain and dataset into the runner."""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

import check_connection
import seed_pipeline
import setup_instructions
import upload_asl_quiz
import upload_quiz_questions
import upload_quiz_web_sdk
from seed_config import DEFAULT_CREDENTIALS_PATH, load_config


@pytest.fixture
def outside_repo(tmp_path: Path, monkeypatch) -> Path:
    """Run from an unrelated directory with no data-dir override, as an installed script would."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("SEED_DATA_DIR", raising=False)
    monkeypatch.delenv("FIREBASE_CREDENTIALS_PATH", raising=False)
    return tmp_path


@pytest.mark.parametrize(
    "module, last_strategy, title",
    [
        (upload_quiz_questions, "application-default", "Accessibility and ASL Knowledge Quiz"),
        (upload_quiz_web_sdk, "anonymous", "Accessibility and ASL Knowledge Quiz"),
        (upload_asl_quiz, "anonymous", "American Sign Language (ASL) Recognition Quiz"),
    ],
)
def test_upload_scripts_use_bundled_data(module, last_strategy, title, outside_repo) -> None:
    with patch.object(seed_pipeline, "run_upload", return_value=0) as run:
        with pytest.raises(SystemExit) as info:
            module.main()

    assert info.value.code == 0
    strategies, dataset = run.call_args.args
    assert strategies[-1].name == last_strategy
    assert dataset.quiz.title == title


def test_missing_dataset_is_logged_not_raised(outside_repo, monkeypatch, caplog) -> None:
    monkeypatch.setenv("SEED_DATA_DIR", str(outside_repo / "nowhere"))

    with patch.object(seed_pipeline, "run_upload") as run, caplog.at_level(logging.ERROR):
        with pytest.raises(SystemExit) as info:
            upload_quiz_questions.main()

    assert info.value.code == seed_pipeline.EXIT_BAD_DATASET
    run.assert_not_called()
    assert "Could not load dataset accessibility_quiz.json" in caplog.text


def test_invalid_dataset_is_logged_not_raised(outside_repo, monkeypatch, caplog) -> None:
    (outside_repo / "asl_quiz.json").write_text('{"quiz": {"title": "broken"}, "questions": []}', encoding="utf-8")
    monkeypatch.setenv("SEED_DATA_DIR", str(outside_repo))

    with patch.object(seed_pipeline, "run_upload") as run, caplog.at_level(logging.ERROR):
        with pytest.raises(SystemExit) as info:
            upload_asl_quiz.main()

    assert info.value.code == seed_pipeline.EXIT_BAD_DATASET
    run.assert_not_called()
    assert "Could not load dataset asl_quiz.json" in caplog.text


def test_data_dir_override_is_read(outside_repo, monkeypatch) -> None:
    bundled = Path(seed_pipeline.__file__).parent / "seed_data" / "asl_quiz.json"
    (outside_repo / "asl_quiz.json").write_text(bundled.read_text(encoding="utf-8"), encoding="utf-8")
    monkeypatch.setenv("SEED_DATA_DIR", str(outside_repo))

    dataset = seed_pipeline.load_seed_dataset(load_config(), "asl_quiz.json")

    assert dataset is not None
    assert dataset.quiz.quiz_type == "asl"


def test_key_file_defaults_to_working_directory(outside_repo) -> None:
    config = load_config()

    assert config.credentials_path == DEFAULT_CREDENTIALS_PATH == "service-account-key.json"
    assert config.data_dir is None


def test_check_connection_exit_code() -> None:
    with patch.object(check_connection, "run_connection_check", return_value=1):
        with pytest.raises(SystemExit) as info:
            check_connection.main()
    assert info.value.code == 1


def test_setup_instructions_always_fails(capsys) -> None:
    with pytest.raises(SystemExit) as info:
        setup_instructions.main()

    assert info.value.code == 1
    out = capsys.readouterr().out
    assert "FIREBASE_SERVICE_ACCOUNT_KEY" in out
    assert "cannot run directly" in out
