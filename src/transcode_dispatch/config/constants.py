"""
System constants that should never change.

These are fixed conventions, not user preferences.
User-configurable values should go in config.yaml instead.
"""

# Filesystem conventions
DEFAULT_INPUT_DIR = "input"  # Input subdirectory scanned for source files
DEFAULT_FFMPEG_BINARY = "ffmpeg"

# Profiles
DEFAULT_PROFILE_KEY = "320"  # Used when the selector is absent or unrecognized

# Reporting
ELAPSED_MINUTES_THRESHOLD = 60.0  # Seconds at which elapsed time switches to m:s
VERBOSE_LOGGING_THRESHOLD = 2  # Verbosity at which logger names are shown
