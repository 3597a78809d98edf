"""Constants and configuration for the fox editor."""

class EditorConstants:
    """Central configuration constants for the editor."""

    # Screen layout
    HEADER_ROWS = 1  # File name bar
    FOOTER_ROWS = 1  # Status / prompt bar
    CHROME_ROWS = HEADER_ROWS + FOOTER_ROWS
    SEARCH_CHROME_ROWS = 3  # Search jumps keep one extra row clear at the bottom
    TAB_WIDTH = 4  # Visual width of a tab; the buffer counts a tab as one column
    TAB_GLYPH = "--->"

    # Theme defaults
    DEFAULT_THEME = "gruvbox-dark"
    CONFIG_FILENAME = "config.toml"

    # File operations
    ATOMIC_SAVE_SUFFIX = ".tmp"  # Suffix for temporary save files

    # Prompt answers that confirm quitting with unsaved changes
    QUIT_CONFIRM_ANSWERS = ("y", "ye", "yes")

    # Status messages
    SAVED_MESSAGE = "Saved!"
    NOT_FOUND_MESSAGE = "Could not find string!"
    PASTE_FAILED_MESSAGE = "Clipboard unavailable"
