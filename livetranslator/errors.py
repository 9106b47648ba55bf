"""Exception types raised by the translator components."""


class LiveTranslatorError(Exception):
    """Base class for all translator errors."""


class RecognitionUnavailableError(LiveTranslatorError):
    """Speech recognition cannot be used in this environment."""


class RecognitionError(LiveTranslatorError):
    """The recognition engine reported an error during a session."""


class TranslationError(LiveTranslatorError):
    """The translation endpoint failed or returned an unusable response."""


class SynthesisError(LiveTranslatorError):
    """The speech synthesis engine failed."""
