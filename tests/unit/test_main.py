"""Unit tests for the command-line entry point."""

import logging
from unittest.mock import patch

import pytest

from livetranslator.config import LiveTranslatorConfig
from livetranslator.main import App, build_parser, setup_logging
from livetranslator.services.translator_service import TranslatorService


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.unit
class TestMain:

    def test_parser_defaults(self):
        args = build_parser().parse_args([])

        assert args.config is None
        assert args.log_level is None
        assert args.target_language is None

    def test_parser_rejects_unknown_language(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--target-language", "xx"])

    def test_setup_logging_writes_file(self, tmp_path, restore_root_logger):
        config = LiveTranslatorConfig()
        log_file = tmp_path / "logs" / "test.log"
        config.set('logging.file_path', str(log_file))
        config.set('logging.console_output', False)

        setup_logging(config, "DEBUG")
        logging.getLogger("livetranslator.test").debug("hello log")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert logging.getLogger().level == logging.DEBUG
        assert "hello log" in log_file.read_text()

    def test_app_builds_service_from_config(self):
        config = LiveTranslatorConfig()
        config.set('translation.default_target_language', "hi")
        config.set('translation.endpoint', "http://localhost:5000/translate")

        app = App(config)
        with patch("livetranslator.main.Pyttsx3Backend"):
            app.init()

        assert isinstance(app.service, TranslatorService)
        assert app.service.get_state().target_language == "hi"
        assert app.service.translator.endpoint == "http://localhost:5000/translate"
        app.cleanup()
