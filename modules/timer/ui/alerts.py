from __future__ import annotations

import tkinter as tk

from modules.helpers.logging_helper import log_exception, log_module_import

log_module_import(__name__)


class CountdownAlert:
    """Fixed short tone played when a countdown reaches zero."""

    def __init__(self, parent: tk.Misc) -> None:
        self._parent = parent

    def notify_finished(self) -> None:
        self._play_sound()

    def _play_sound(self) -> None:
        try:
            self._parent.bell()
        except Exception:
            log_exception("Unable to play countdown cue", func_name="CountdownAlert._play_sound")
