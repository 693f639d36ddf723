"""Centralized styles and font definitions for the application."""

from exam_app.core.models import TimerTick

from .color_palette import ColorPalette, Theme

class Styles:
    """Helper class to generate Qt stylesheets based on the current theme."""

    @staticmethod
    def get_main_window_style(theme: Theme = Theme.LIGHT) -> str:
        return f"""
            QMainWindow {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
            }}
            QWidget {{
                background-color: {ColorPalette.BACKGROUND_PRIMARY.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QLabel {{
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
            }}
            QPushButton {{
                background-color: {ColorPalette.BUTTON_SECONDARY_BG.get(theme)};
                color: {ColorPalette.TEXT_PRIMARY.get(theme)};
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                padding: 6px 12px;
            }}
            QPushButton:hover {{
                background-color: {ColorPalette.BUTTON_HOVER_BG.get(theme)};
            }}
            QPushButton:disabled {{
                color: {ColorPalette.BUTTON_DISABLED_TEXT.get(theme)};
            }}
            QPushButton#submitButton {{
                background-color: {ColorPalette.BUTTON_PRIMARY_BG.get(theme)};
                color: {ColorPalette.BUTTON_PRIMARY_TEXT.get(theme)};
                border: 1px solid {ColorPalette.BUTTON_PRIMARY_BG.get(theme)};
            }}
            QProgressBar {{
                border: 1px solid {ColorPalette.BORDER_PRIMARY.get(theme)};
                border-radius: 4px;
                max-height: 8px;
            }}
            QProgressBar::chunk {{
                background-color: {ColorPalette.ACCENT_PRIMARY.get(theme)};
            }}
        """

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"

    @staticmethod
    def get_timer_label_style(tick: TimerTick, blink_state: bool = False, theme: Theme = Theme.LIGHT) -> str:
        """Plain while time is ample, red in the warning window, blinking when urgent."""
        base_style = "padding: 2px 6px; border-radius: 4px; font-size: 14pt; font-weight: bold;"
        if tick.urgent:
            palette_entry = ColorPalette.TIMER_URGENT_BLINK if blink_state else ColorPalette.TIMER_URGENT
            return (
                base_style
                + f" color: {ColorPalette.TEXT_ON_ALERT.get(theme)};"
                + f" background-color: {palette_entry.get(theme)};"
            )
        if tick.warn:
            return base_style + f" color: {ColorPalette.TIMER_WARN.get(theme)};"
        return base_style
