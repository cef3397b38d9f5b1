"""
Configuration constants for the PassKeeper application.
"""

import logging
import string

# Application Metadata
APP_VERSION = "1.0"  # Use: Current version of the application. Type: str. Range: Semantic versioning string (e.g., "1.0.0")
APP_NAME = "PassKeeper"  # Use: Full name of the application. Type: str. Range: Any valid string.
APP_TITLE_PREFIX = f"{APP_NAME} v{APP_VERSION}"  # Use: Window title, combining name and version. Type: str (f-string). Range: Derived from APP_NAME and APP_VERSION.
APP_STYLE = 'Fusion'  # Use: PyQt5 application style. Type: str. Range: Valid PyQt5 style names (e.g., 'Fusion', 'Windows', 'Macintosh').

# Password Generator Settings
PASSWORD_GENERATOR_SYMBOLS = "!@#$%^&*()_-+=<>?"  # Use: Symbol characters appended to the generator alphabet. Type: str. Range: Fixed; changing it breaks compatibility of the alphabet.
PASSWORD_GENERATOR_ALPHABET = (  # Use: Full generator alphabet in its fixed order. Type: str. Range: 79 distinct characters.
    string.ascii_uppercase
    + string.ascii_lowercase
    + string.digits
    + PASSWORD_GENERATOR_SYMBOLS
)
PASSWORD_GENERATOR_DEFAULT_LENGTH = 12  # Use: Default length for generated passwords. Type: int. Range: PASSWORD_GENERATOR_MIN_LENGTH to PASSWORD_GENERATOR_MAX_LENGTH.
PASSWORD_GENERATOR_MIN_LENGTH = 1  # Use: Minimum length offered by the generator dialog. Type: int. Range: Positive integer.
PASSWORD_GENERATOR_MAX_LENGTH = 128  # Use: Maximum length offered by the generator dialog. Type: int. Range: Positive integer.
PASSWORD_MIN_LENGTH = 12  # Use: Minimum length for a password to be reported as strong. Type: int. Range: Typically 8 to 16.

# UI Settings
WINDOW_GEOMETRY = (100, 100, 480, 720)  # Use: Initial main window position and size (x, y, width, height). Type: tuple[int, int, int, int]. Range: Positive integers.
PASSWORD_HIDDEN_TEXT = "******"  # Use: Placeholder text shown on a credential card while its password is hidden. Type: str. Range: Any string.
CLIPBOARD_CLEAR_TIMEOUT_DEFAULT_SECONDS = 30  # Use: Seconds after which a copied password is cleared from the clipboard. Type: int. Range: 0 (disabled) or positive integer.
CLIPBOARD_CLEAR_TIMEOUT_DEFAULT = CLIPBOARD_CLEAR_TIMEOUT_DEFAULT_SECONDS * 1000  # Use: Clipboard clear timeout in milliseconds. Derived from CLIPBOARD_CLEAR_TIMEOUT_DEFAULT_SECONDS. Type: int. Range: Derived value.
STATUS_MESSAGE_TIMEOUT = 2000  # Use: Milliseconds a transient status bar message stays visible. Type: int. Range: Positive integer.
DELETE_CONFIRMATION_TEXT = "Are you sure you want to delete the entry for {site}?"  # Use: Text of the delete confirmation prompt. Type: str (format string with {site}). Range: Any descriptive string.

# Logging Settings
LOG_LEVEL = logging.INFO  # Use: Root log level configured by main(). Type: int. Range: A logging module level constant.
LOG_FORMAT = '%(asctime)s - %(levelname)s - %(name)s - %(message)s'  # Use: Format string passed to logging.basicConfig. Type: str. Range: Valid logging format string.
