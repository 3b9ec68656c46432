"""Styling constants for the compact timer overlay window."""

OVERLAY_TITLE = "Overlay Timer"
OVERLAY_BG_COLOR = "#1e1e1e"
OVERLAY_BORDER_COLOR = "#4c8bf5"
OVERLAY_FG_COLOR = "#f0f0f0"
CLOCK_FONT = ("Consolas", 24, "bold")
BUTTON_FONT = ("Segoe UI", 11)
CHROME_FONT = ("Segoe UI", 10, "bold")
OPTIONS_GEOMETRY_HEIGHT = 170
