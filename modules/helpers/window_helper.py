import ctypes
import platform
from typing import Optional, Tuple

from screeninfo import get_monitors

from modules.helpers.config_helper import ConfigHelper
from modules.helpers.logging_helper import log_debug, log_function, log_warning
from modules.helpers.logging_helper import log_module_import

log_module_import(__name__)

DEFAULT_WIDTH = 200
DEFAULT_HEIGHT = 100
DEFAULT_MARGIN_RIGHT = 20
DEFAULT_MARGIN_BOTTOM = 40

SPI_GETWORKAREA = 0x0030

Rect = Tuple[int, int, int, int]


def _query_system_work_area() -> Optional[Rect]:
    """Usable area of the primary display as reported by the OS, taskbar excluded.

    Only Windows exposes it without extra dependencies; other platforms return None.
    """
    if platform.system().lower() != "windows":
        return None
    from ctypes import wintypes

    rect = wintypes.RECT()
    user32 = ctypes.WinDLL("user32")
    if not user32.SystemParametersInfoW(SPI_GETWORKAREA, 0, ctypes.byref(rect), 0):
        return None
    return int(rect.left), int(rect.top), int(rect.right - rect.left), int(rect.bottom - rect.top)


def _intersect(first: Rect, second: Rect) -> Optional[Rect]:
    left = max(first[0], second[0])
    top = max(first[1], second[1])
    right = min(first[0] + first[2], second[0] + second[2])
    bottom = min(first[1] + first[3], second[1] + second[3])
    if right <= left or bottom <= top:
        return None
    return left, top, right - left, bottom - top


def get_primary_work_area(window=None) -> Rect:
    """Return ``(x, y, width, height)`` of the primary display's work area.

    The screeninfo monitor rectangle is narrowed to the OS work area when the
    platform reports one; the Tk screen size is the last resort.
    """
    try:
        monitors = get_monitors()
    except Exception as exc:
        log_warning(f"Monitor enumeration failed: {exc}",
                    func_name="modules.helpers.window_helper.get_primary_work_area")
        monitors = []

    try:
        system_area = _query_system_work_area()
    except Exception as exc:
        log_warning(f"Work area query failed: {exc}",
                    func_name="modules.helpers.window_helper.get_primary_work_area")
        system_area = None

    if monitors:
        primary = next((m for m in monitors if getattr(m, "is_primary", False)), monitors[0])
        monitor_area = (int(primary.x), int(primary.y), int(primary.width), int(primary.height))
        if system_area is not None:
            return _intersect(monitor_area, system_area) or monitor_area
        return monitor_area

    if system_area is not None:
        return system_area
    if window is not None:
        return 0, 0, int(window.winfo_screenwidth()), int(window.winfo_screenheight())
    return 0, 0, 0, 0


def compute_bottom_right_position(
    area: Tuple[int, int, int, int],
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
    margin_right: int = DEFAULT_MARGIN_RIGHT,
    margin_bottom: int = DEFAULT_MARGIN_BOTTOM,
) -> Tuple[int, int]:
    area_x, area_y, area_width, area_height = area
    x = area_x + area_width - width - margin_right
    y = area_y + area_height - height - margin_bottom
    return max(area_x, x), max(area_y, y)


@log_function
def position_window_at_bottom_right(window, width: Optional[int] = None, height: Optional[int] = None):
    """ Place une fenêtre dans le coin inférieur droit de l'écran principal.

    Args:
        window: la fenêtre CustomTkinter ou Tkinter à positionner.
        width: largeur fixe (facultatif). Si None, lue dans la configuration.
        height: hauteur fixe (facultatif). Si None, lue dans la configuration.
    """
    if width is None:
        width = ConfigHelper.getint("Window", "width", fallback=DEFAULT_WIDTH)
    if height is None:
        height = ConfigHelper.getint("Window", "height", fallback=DEFAULT_HEIGHT)
    margin_right = ConfigHelper.getint("Window", "margin_right", fallback=DEFAULT_MARGIN_RIGHT)
    margin_bottom = ConfigHelper.getint("Window", "margin_bottom", fallback=DEFAULT_MARGIN_BOTTOM)

    area = get_primary_work_area(window)
    x, y = compute_bottom_right_position(area, width, height, margin_right, margin_bottom)

    geometry = f"{width}x{height}+{x}+{y}"
    log_debug(f"Applying geometry {geometry} on work area {area[2]}x{area[3]}",
              func_name="modules.helpers.window_helper.position_window_at_bottom_right")
    window.geometry(geometry)
    return x, y
