"""Main application entry point for the Live Voice Translator."""

import sys
import argparse
import logging
from pathlib import Path

from . import __version__
from .audio.audio_pub import AudioPublisher
from .audio.capture import AudioCapture
from .config import LiveTranslatorConfig
from .models.translation import SUPPORTED_LANGUAGES
from .recognition.google_backend import GoogleStreamingBackend
from .services.translator_service import TranslatorService
from .synthesis.pyttsx3_backend import Pyttsx3Backend
from .translation.client import LibreTranslateClient
from .ui.translator_screen import TranslatorScreen

logger = logging.getLogger(__name__)

AUDIO_TOPIC = "audio.frame"
AUDIO_ERROR_TOPIC = "audio.error"


class App:
    """Builds the translator components from configuration and runs the screen."""

    def __init__(self, config: LiveTranslatorConfig):
        self.config = config
        self.service = None

    def init(self) -> None:
        logger.info("Initializing services...")

        sample_rate = self.config.get('audio.sample_rate', 16000)
        chunk_size = self.config.get('audio.chunk_size', 1024)
        channels = self.config.get('audio.channels', 1)
        logger.info(f"Audio settings: {sample_rate}Hz, {chunk_size} samples/chunk, {channels} channels")

        self.audio_publisher = AudioPublisher(AUDIO_TOPIC, AUDIO_ERROR_TOPIC)
        self.audio_capture = AudioCapture(
            callback=self.audio_publisher.publish_audio_event,
            error_callback=self.audio_publisher.publish_audio_error,
            sample_rate=sample_rate,
            chunk_size=chunk_size,
            channels=channels,
        )

        backend = GoogleStreamingBackend(
            credentials_path=self.config.get_google_credentials_path(),
            sample_rate=sample_rate,
            language=self.config.get('google_cloud.language', 'en-US'),
            use_enhanced=self.config.get('google_cloud.use_enhanced_model', True),
            enable_automatic_punctuation=self.config.get('google_cloud.enable_automatic_punctuation', True),
        )

        translator = LibreTranslateClient(
            endpoint=self.config.get('translation.endpoint'),
            source_language=self.config.get('translation.source_language', 'en'),
            timeout_seconds=self.config.get('translation.timeout_seconds', 15.0),
            api_key=self.config.get('translation.api_key'),
        )

        synthesizer = Pyttsx3Backend(
            rate=self.config.get('synthesis.rate', 170),
            volume=self.config.get('synthesis.volume', 1.0),
        )

        self.service = TranslatorService(
            backend=backend,
            translator=translator,
            synthesizer=synthesizer,
            capture=self.audio_capture,
            audio_topic=AUDIO_TOPIC,
            audio_error_topic=AUDIO_ERROR_TOPIC,
            target_language=self.config.get('translation.default_target_language', 'es'),
        )

    def run(self) -> None:
        TranslatorScreen(self.service).run()

    def cleanup(self) -> None:
        if self.service is not None:
            self.service.shutdown()


def setup_logging(config: LiveTranslatorConfig, level: str = "INFO") -> None:
    """Set up logging configuration from YAML config."""
    log_file_path = config.get('logging.file_path', 'data/logs/livetranslator.log')
    console_output = config.get('logging.console_output', True)

    Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)

    handlers = []

    # File handler always records everything
    file_handler = logging.FileHandler(log_file_path)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
    ))
    handlers.append(file_handler)

    if console_output:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.WARNING)  # Keep the live screen readable
        console_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        handlers.append(console_handler)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper()))
    for handler in handlers:
        root_logger.addHandler(handler)

    logger.info("=" * 50)
    logger.info("Live Voice Translator starting up")
    logger.info(f"Log file: {log_file_path}")
    logger.info(f"Log level set to: {level}")
    logger.info("=" * 50)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Live Voice Translator - speak English, hear it translated",
        epilog="Keys: 1=Start listening, 2=Stop, t=Translate & speak, l=Language, v=Voice, 3=Reset, q=Quit"
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration YAML file (default: built-in settings)"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Set logging level (overrides config)"
    )
    parser.add_argument(
        "--target-language",
        type=str,
        choices=list(SUPPORTED_LANGUAGES),
        help="Initial target language (overrides config)"
    )
    parser.add_argument(
        "--endpoint",
        type=str,
        help="Translation endpoint URL (overrides config)"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Live Voice Translator v{__version__}"
    )
    return parser


def main() -> None:
    """Main entry point for the Live Voice Translator."""
    args = build_parser().parse_args()

    try:
        config = LiveTranslatorConfig(args.config)
    except (FileNotFoundError, ValueError) as e:
        print(f"❌ Configuration error: {e}")
        sys.exit(1)

    if args.target_language:
        config.set('translation.default_target_language', args.target_language)
    if args.endpoint:
        config.set('translation.endpoint', args.endpoint)

    setup_logging(config, args.log_level or config.get('logging.level', 'INFO'))

    app = App(config)
    try:
        app.init()
        app.run()
    except KeyboardInterrupt:
        print("\n👋 Goodbye!")
    except Exception as e:
        print(f"❌ Error: {e}")
        logger.error(f"Application error: {e}", exc_info=True)
        sys.exit(1)
    finally:
        app.cleanup()


if __name__ == "__main__":
    main()
