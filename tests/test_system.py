import json
import logging

import pytest
from xmp2pp3.kernel.system.config import (
    AppConfig,
    SUPPORTED_IMAGE_EXTENSIONS,
    SUPPORTED_RAW_EXTENSIONS,
    _resolve_log_level,
    generate_default_config,
    load_user_config,
)
from xmp2pp3.kernel.system.logging import get_logger, setup_logging


@pytest.fixture
def config(tmp_path):
    return AppConfig(config_dir=str(tmp_path / "cfg"))


def test_config_defaults(config):
    assert config.sidecar_suffix == ".xmp"
    assert config.profile_suffix == ".pp3"
    assert config.config_file.endswith("config.json")
    assert ".cr2" in SUPPORTED_RAW_EXTENSIONS
    assert SUPPORTED_RAW_EXTENSIONS < SUPPORTED_IMAGE_EXTENSIONS
    assert ".jpg" in SUPPORTED_IMAGE_EXTENSIONS
    assert ".xmp" not in SUPPORTED_IMAGE_EXTENSIONS


def test_log_level_names():
    assert _resolve_log_level("debug") == logging.DEBUG
    assert _resolve_log_level(" WARNING ") == logging.WARNING
    assert _resolve_log_level("chatty") == logging.INFO


def test_missing_user_config(config):
    assert load_user_config(config) == {"cli": {}}


def test_generate_then_load(config):
    assert generate_default_config(config) is True
    assert load_user_config(config) == {"cli": {"force": False, "verbose": False}}
    assert generate_default_config(config) is False


def test_unknown_sections_are_ignored(config, tmp_path):
    (tmp_path / "cfg").mkdir()
    with open(config.config_file, "w") as f:
        json.dump({"cli": {"force": True}, "other": 1}, f)
    assert load_user_config(config) == {"cli": {"force": True}}


def test_get_logger_names():
    assert get_logger().name == "xmp2pp3"
    assert get_logger("cli").name == "xmp2pp3.cli"
    assert get_logger("xmp2pp3.services.conversion").name == "xmp2pp3.services.conversion"


def test_setup_logging_does_not_duplicate_handlers():
    logger = logging.getLogger("xmp2pp3")
    saved = list(logger.handlers), logger.level
    try:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        setup_logging(logging.INFO)
        setup_logging(logging.DEBUG)
        assert len(logger.handlers) == 1
        assert logger.handlers[0].level == logging.DEBUG
        assert logger.level == logging.DEBUG
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        for handler in saved[0]:
            logger.addHandler(handler)
        logger.setLevel(saved[1])
