"""Terminal translator screen with live status display."""

import time
import threading
import logging

from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..models.translation import SUPPORTED_LANGUAGES
from ..models.ui import TranslatorState
from ..models.voice import NO_VOICE
from ..services.translator_service import TranslatorService
from .keyboard_input import KeyboardInputHandler

logger = logging.getLogger(__name__)

KEY_HELP = ("1=Start listening  2=Stop listening  t=Translate & speak  "
            "l=Next language  v=Next voice  r=Reload voices  3=Reset  q=Quit")


class TranslatorScreen:
    """Renders the translator state and maps key presses to service actions."""

    def __init__(self, service: TranslatorService, refresh_per_second: float = 4.0):
        self.console = Console()
        self.service = service
        self.refresh_interval = 1.0 / refresh_per_second
        self.stop_event = threading.Event()
        self.input_handler = KeyboardInputHandler(self.handle_key)

    def render(self, state: TranslatorState) -> Panel:
        """Build the full screen for one state snapshot."""
        parts = []

        if state.error:
            parts.append(Text(state.error, style="bold red"))

        if state.listening:
            level_bar = "█" * int(state.peak_level * 20)
            parts.append(Text.assemble(("🔴 Listening...", "bold red"), f"  {level_bar}"))
        else:
            parts.append(Text("⏹️  Press 1 to start listening", style="bold yellow"))

        recognized = state.recognized_text()
        parts.append(Text.assemble(("Recognized: ", "bold"),
                                   (recognized or "(nothing yet)",
                                    "white" if recognized else "dim italic")))

        settings = Table.grid(padding=(0, 2))
        settings.add_column(style="cyan")
        settings.add_column()
        language_name = SUPPORTED_LANGUAGES.get(state.target_language, state.target_language)
        settings.add_row("Target Language:", f"{language_name} ({state.target_language})")
        settings.add_row("Voice:", self._voice_label(state))
        parts.append(settings)

        if state.translating:
            parts.append(Text("🔄 Translating...", style="yellow italic"))
        elif not recognized:
            parts.append(Text("Translate & Speak unavailable until something is recognized",
                              style="dim"))

        if state.translation:
            parts.append(Text.assemble(("Translation: ", "bold green"), state.translation))

        parts.append(Text(KEY_HELP, style="dim"))
        return Panel(Group(*parts), title="Live Voice Translator", border_style="bright_blue")

    @staticmethod
    def _voice_label(state: TranslatorState) -> str:
        if not state.voices:
            return "No voices available"
        if state.selected_voice_id == NO_VOICE:
            return "None selected"
        for voice in state.voices:
            if voice.voice_id == state.selected_voice_id:
                return voice.label
        return state.selected_voice_id

    def handle_key(self, key: str) -> bool:
        """Dispatch one key press. Returns False when the screen should close."""
        state = self.service.get_state()

        if key in ("q", "\x03"):
            self.stop_event.set()
            return False
        if key == "1":
            if not state.listening:
                self.service.start_listening()
        elif key == "2":
            self.service.stop_listening()
        elif key == "t":
            if state.recognized_text() and not state.translating:
                self.service.start_translate_and_speak()
        elif key == "l":
            self.service.cycle_target_language()
        elif key == "v":
            self.service.cycle_voice()
        elif key == "r":
            self.service.load_voices()
        elif key == "3":
            self.service.reset()
        else:
            logger.debug(f"Ignoring key: {key!r}")
        return True

    def run(self) -> None:
        """Show the screen until the user quits."""
        self.service.load_voices()
        self.input_handler.start()
        try:
            with Live(self.render(self.service.get_state()), console=self.console,
                      auto_refresh=False, transient=False) as live:
                while not self.stop_event.is_set():
                    live.update(self.render(self.service.get_state()), refresh=True)
                    time.sleep(self.refresh_interval)
        finally:
            self.input_handler.stop()
