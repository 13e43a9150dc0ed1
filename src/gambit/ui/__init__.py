"""PyQt6 front-end: board scene, dialogs and the main window."""
