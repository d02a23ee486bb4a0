"""PySide6 shell around the lathe scene: sketch canvas and main window."""
