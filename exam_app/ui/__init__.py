"""Qt UI components for the exam application.

Widgets are imported from their own modules so that the HTML renderers stay
importable without loading Qt.
"""
