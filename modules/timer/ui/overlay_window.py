from __future__ import annotations

from tkinter import messagebox
from typing import Dict, List, Optional, Tuple

import customtkinter as ctk

from modules.helpers.config_helper import ConfigHelper
from modules.helpers.logging_helper import log_exception, log_info, log_module_import
from modules.helpers.window_helper import position_window_at_bottom_right
from modules.timer.controller import TimerController
from modules.timer.fade import FadeController
from modules.timer.host import CLOSE_CHANNEL, MINIMIZE_CHANNEL, WindowHost
from modules.timer.models import START_LABEL, TimerDisplay, TimerMode
from modules.timer.ui.alerts import CountdownAlert
from modules.timer.ui.opacity import OpacityAnimator
from modules.timer.ui.overlay_style import (
    BUTTON_FONT,
    CHROME_FONT,
    CLOCK_FONT,
    OPTIONS_GEOMETRY_HEIGHT,
    OVERLAY_BG_COLOR,
    OVERLAY_BORDER_COLOR,
    OVERLAY_FG_COLOR,
    OVERLAY_TITLE,
)

log_module_import(__name__)

INTERACTION_EVENTS = ("<Motion>", "<ButtonPress>", "<KeyPress>")


class OverlayTimerWindow(ctk.CTk):
    """Frameless always-on-top window showing the timer.

    The window only renders and forwards events; all timer decisions live
    in the :class:`TimerController` handed to :meth:`attach`.
    """

    def __init__(self, host: WindowHost, presets: List[int]):
        super().__init__()
        self._host = host
        self._presets = list(presets)
        self._controller: Optional[TimerController] = None
        self._fade: Optional[FadeController] = None
        self._alert = CountdownAlert(self)
        self._drag_offset_x = 0
        self._drag_offset_y = 0
        self._restore_frameless = False
        self._last_fields: Optional[Tuple[int, int, int]] = None
        self._mode_shown: Optional[str] = None
        self._torn_down = False

        self._base_width = ConfigHelper.getint("Window", "width", fallback=200)
        self._base_height = ConfigHelper.getint("Window", "height", fallback=100)

        self.title(OVERLAY_TITLE)
        self.resizable(False, False)
        self.overrideredirect(True)
        self.attributes("-topmost", True)
        self.configure(fg_color=OVERLAY_BG_COLOR)

        self._animator = OpacityAnimator(self, initial=1.0)

        self._build_widgets()
        position_window_at_bottom_right(self, self._base_width, self._base_height)

        self._host.on(MINIMIZE_CHANNEL, self._on_minimize_message)
        self._host.on(CLOSE_CHANNEL, self._on_close_message)
        self.protocol("WM_DELETE_WINDOW", self._on_close_requested)
        self.bind("<Map>", self._on_map)

    def _build_widgets(self) -> None:
        self._container = ctk.CTkFrame(
            self,
            fg_color=OVERLAY_BG_COLOR,
            border_color=OVERLAY_BORDER_COLOR,
            border_width=1,
        )
        self._container.pack(fill="both", expand=True)

        chrome = ctk.CTkFrame(self._container, fg_color="transparent", height=18)
        chrome.pack(fill="x", padx=4, pady=(2, 0))
        self._close_button = ctk.CTkButton(chrome, text="×", width=18, height=16, font=CHROME_FONT)
        self._close_button.pack(side="right")
        self._minimize_button = ctk.CTkButton(chrome, text="–", width=18, height=16, font=CHROME_FONT)
        self._minimize_button.pack(side="right", padx=(0, 2))

        self._clock_label = ctk.CTkLabel(
            self._container,
            text="00:00:00",
            text_color=OVERLAY_FG_COLOR,
            font=CLOCK_FONT,
        )
        self._clock_label.pack(fill="x")

        controls = ctk.CTkFrame(self._container, fg_color="transparent")
        controls.pack(fill="x", padx=4, pady=(0, 4))
        self._start_button = ctk.CTkButton(controls, text=START_LABEL, width=56, height=22, font=BUTTON_FONT)
        self._start_button.pack(side="left", expand=True, padx=1)
        self._reset_button = ctk.CTkButton(controls, text="Reset", width=56, height=22, font=BUTTON_FONT)
        self._reset_button.pack(side="left", expand=True, padx=1)
        self._mode_button = ctk.CTkButton(controls, text="Mode", width=56, height=22, font=BUTTON_FONT)
        self._mode_button.pack(side="left", expand=True, padx=1)

        self._options = ctk.CTkFrame(self._container, fg_color="transparent")

        presets_row = ctk.CTkFrame(self._options, fg_color="transparent")
        presets_row.pack(fill="x", pady=(0, 4))
        self._preset_buttons: List[ctk.CTkButton] = []
        for minutes in self._presets:
            button = ctk.CTkButton(presets_row, text=f"{minutes}m", width=36, height=20, font=BUTTON_FONT)
            button.pack(side="left", expand=True, padx=1)
            self._preset_buttons.append(button)

        fields_row = ctk.CTkFrame(self._options, fg_color="transparent")
        fields_row.pack(fill="x")
        self._field_vars: Dict[str, ctk.StringVar] = {}
        self._field_entries: Dict[str, ctk.CTkEntry] = {}
        for index, name in enumerate(("hours", "minutes", "seconds")):
            if index:
                ctk.CTkLabel(fields_row, text=":", width=6, text_color=OVERLAY_FG_COLOR).pack(side="left")
            var = ctk.StringVar(value="0")
            entry = ctk.CTkEntry(fields_row, textvariable=var, width=44, height=22, justify="center")
            entry.pack(side="left", expand=True, padx=1)
            self._field_vars[name] = var
            self._field_entries[name] = entry

        for widget in (self._container, chrome, self._clock_label):
            self._bind_dragging(widget)

    # -- wiring -----------------------------------------------------------

    def attach(self, controller: TimerController, fade: FadeController) -> None:
        self._controller = controller
        self._fade = fade

        self._start_button.configure(command=controller.start)
        self._reset_button.configure(command=controller.reset)
        self._mode_button.configure(command=controller.switch_mode)
        self._minimize_button.configure(command=controller.request_minimize)
        self._close_button.configure(command=controller.request_close)
        for button, minutes in zip(self._preset_buttons, self._presets):
            button.configure(command=lambda value=minutes: controller.select_preset(value))
        for name, entry in self._field_entries.items():
            entry.bind("<Return>", lambda _event, field=name: self._on_field_changed(field))
            entry.bind("<FocusOut>", lambda _event, field=name: self._on_field_changed(field))

        controller.set_invalid_start_handler(self._show_invalid_start)
        controller.subscribe_finished(self._alert.notify_finished)
        controller.subscribe(self._on_timer_changed)

        for sequence in INTERACTION_EVENTS:
            self.bind_all(sequence, fade.handle_interaction, add="+")

        self.animate_opacity(fade.normal_opacity, 0)
        fade.start()
        log_info("Overlay attached", func_name="OverlayTimerWindow.attach")

    def animate_opacity(self, opacity: float, duration_s: float) -> None:
        self._animator.animate_to(opacity, duration_s)

    # -- controller callbacks ---------------------------------------------

    def _on_timer_changed(self, display: TimerDisplay) -> None:
        self._clock_label.configure(text=display.time_text)
        self._start_button.configure(text=display.start_label)

        fields = (display.hours, display.minutes, display.seconds)
        if fields != self._last_fields:
            self._last_fields = fields
            for name, value in zip(("hours", "minutes", "seconds"), fields):
                self._field_vars[name].set(str(value))

        if display.mode != self._mode_shown:
            self._mode_shown = display.mode
            self._show_options(display.mode == TimerMode.COUNTDOWN)

    def _show_invalid_start(self, message: str) -> None:
        messagebox.showwarning(OVERLAY_TITLE, message, parent=self)

    def _on_field_changed(self, name: str) -> None:
        if self._controller is None:
            return
        value = self._controller.set_field(name, self._field_vars[name].get())
        self._field_vars[name].set(str(value))

    def _show_options(self, visible: bool) -> None:
        height = OPTIONS_GEOMETRY_HEIGHT if visible else self._base_height
        if visible:
            self._options.pack(fill="x", padx=4, pady=(0, 4))
        else:
            self._options.pack_forget()
        self._resize_keeping_bottom(height)

    def _resize_keeping_bottom(self, height: int) -> None:
        self.update_idletasks()
        current_height = self.winfo_height() if self.winfo_height() > 1 else self._base_height
        x = self.winfo_x()
        y = self.winfo_y() + current_height - height
        self.geometry(f"{self._base_width}x{height}+{x}+{max(0, y)}")

    # -- dragging ---------------------------------------------------------

    def _bind_dragging(self, widget) -> None:
        widget.bind("<ButtonPress-1>", self._on_drag_start)
        widget.bind("<B1-Motion>", self._on_drag_motion)

    def _on_drag_start(self, event) -> None:
        self._drag_offset_x = event.x_root - self.winfo_x()
        self._drag_offset_y = event.y_root - self.winfo_y()

    def _on_drag_motion(self, event) -> None:
        new_x = event.x_root - self._drag_offset_x
        new_y = event.y_root - self._drag_offset_y
        self.geometry(f"+{new_x}+{new_y}")

    # -- host messages ----------------------------------------------------

    def _on_minimize_message(self) -> None:
        # Frameless windows cannot be iconified; drop the flag until remapped.
        self._restore_frameless = True
        self.overrideredirect(False)
        self.iconify()

    def _on_map(self, _event) -> None:
        if self._restore_frameless and self.state() == "normal":
            self._restore_frameless = False
            self.overrideredirect(True)
            self.attributes("-topmost", True)

    def _on_close_requested(self) -> None:
        if self._controller is not None:
            self._controller.request_close()
        else:
            self._on_close_message()

    def _on_close_message(self) -> None:
        self._teardown()
        self.destroy()

    def _teardown(self) -> None:
        if self._torn_down:
            return
        self._torn_down = True
        try:
            for sequence in INTERACTION_EVENTS:
                self.unbind_all(sequence)
            self._animator.cancel()
            if self._fade is not None:
                self._fade.dispose()
            if self._controller is not None:
                self._controller.dispose()
            self._host.off(MINIMIZE_CHANNEL)
            self._host.off(CLOSE_CHANNEL)
        except Exception:
            log_exception("Error while tearing down overlay", func_name="OverlayTimerWindow._teardown")
