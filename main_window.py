import customtkinter as ctk

from modules.helpers.logging_helper import (
    initialize_logging,
    log_info,
    log_module_import,
)
from modules.timer import (
    WindowHost,
    create_fade_controller,
    create_timer_controller,
    get_preset_minutes,
)
from modules.timer.ui.overlay_window import OverlayTimerWindow

log_module_import(__name__)

ctk.set_appearance_mode("Dark")
ctk.set_default_color_theme("blue")


def build_app() -> OverlayTimerWindow:
    host = WindowHost()
    window = OverlayTimerWindow(host, get_preset_minutes())
    controller = create_timer_controller(scheduler=window, host=host)
    fade = create_fade_controller(window, window.animate_opacity)
    window.attach(controller, fade)
    return window


def main() -> None:
    initialize_logging()
    log_info("Starting overlay timer", func_name="main_window.main")
    app = build_app()
    app.mainloop()


if __name__ == "__main__":
    main()
