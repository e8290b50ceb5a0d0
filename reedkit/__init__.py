"""Line-editor building blocks: edit commands and events, command history in memory, text files or SQLite, history cursors and hints."""

__version__ = "0.1.0"