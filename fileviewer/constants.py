"""Constants and configuration for the file viewer."""

class ViewerConstants:
    """Central configuration constants for the viewer."""

    # Layout
    GUTTER_WIDTH = 7  # Six-digit line number plus one separator column
    MAX_GUTTER_WIDTH = 32
    TAB_SIZE = 8  # Tab stops every 8 columns

    # Navigation
    PAGE_STEP = 10  # Lines moved by PageUp/PageDown

    # Resize handling
    RESIZE_PIPE_MARKER = b'R'  # Byte written to pipe to signal resize

    # Status line
    STATUS_TEMPLATE = " {name}  line {line}/{total}"
    EMPTY_STATUS_TEMPLATE = " {name}  (empty)"
    HELP_TEXT = "q to quit"
