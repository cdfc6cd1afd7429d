"""Module: config.py

Author: Michael Economou
Date: 2026-03-02

This module defines global configuration constants used throughout the
samplepool application. It centralizes logging settings, transfer queue
messages, drag & drop identifiers and audio file filters.

Contains:
- Application information
- Logging configuration
- Transfer queue settings
- Drag & drop settings
- Audio file extensions and import filters
"""

# =====================================
# APPLICATION INFORMATION
# =====================================

APP_NAME = "samplepool"
APP_VERSION = "0.4"
APP_AUTHOR = "Michael Economou"

WINDOW_TITLE = "Sample Pool"

# =====================================
# LOGGING CONFIGURATION
# =====================================

LOG_LEVEL = "INFO"

# Console logging
LOG_TO_CONSOLE = True
LOG_CONSOLE_LEVEL = "INFO"

# File logging
LOG_TO_FILE = True
LOG_FILE_LEVEL = "INFO"
LOG_FILE_MAX_BYTES = 5_000_000  # 5MB per file
LOG_FILE_BACKUP_COUNT = 3

# Debug file logging
LOG_DEBUG_FILE_ENABLED = False
LOG_DEBUG_FILE_MAX_BYTES = 10_000_000
LOG_DEBUG_FILE_BACKUP_COUNT = 2

# Show records logged with extra={"dev_only": True} in the console
SHOW_DEV_ONLY_IN_CONSOLE = False

# =====================================
# TRANSFER QUEUE
# =====================================

# Error text stored on items that were not copied because of a conflict
SKIPPED_FILE_EXISTS_MESSAGE = "Skipped (file exists)"
IMPORT_CANCELLED_MESSAGE = "Import cancelled"
TRANSFER_CANCELLED_MESSAGE = "Transfer cancelled"

# Chunk size used by the local copy primitive (progress granularity)
COPY_CHUNK_SIZE = 1024 * 1024

# Delay before the transfer panel hides itself once every transfer completed
TRANSFER_PANEL_AUTOCLOSE_MS = 1500

# =====================================
# DRAG & DROP
# =====================================

# In-app pane-to-pane drags carry a JSON array of absolute paths under this type
INTERNAL_DRAG_MIME_TYPE = "application/x-samplepool-paths"

# =====================================
# AUDIO FILES
# =====================================

AUDIO_EXTENSIONS = {"wav", "aif", "aiff", "mp3", "flac", "ogg", "m4a"}

# Extensions offered by the "Import Files" dialog
IMPORT_EXTENSIONS = ("wav", "aif", "aiff")

# Format label shown in the pane tables (and used by the format filter)
FORMAT_LABELS = {
    "wav": "WAV",
    "aif": "AIF",
    "aiff": "AIF",
    "mp3": "MP3",
    "flac": "FLAC",
    "ogg": "OGG",
    "m4a": "M4A",
}

# =====================================
# PANES
# =====================================

SOURCE_PANE = "source"
DESTINATION_PANE = "destination"

PANE_COLUMNS = ["Name", "Size", "Format", "Bit", "Rate", "Ch"]
TRANSFER_COLUMNS = ["#", "Progress", "File", "Size", "Status"]
