import re
from pathlib import PurePath

from orchestrator.exceptions import InvalidInput

NATIONAL_ID_LENGTH = 12
FACE_CAPTURE_MARKER = "captured"


# -----------------------------------------------------------------------------
# AADHAAR NUMBER ENTRY
# -----------------------------------------------------------------------------

def validate_aadhaar_format(aadhaar_number: str) -> bool:
    """True when the value is exactly 12 digits, ignoring spaces and hyphens."""
    cleaned_aadhaar = re.sub(r'[\s-]', '', aadhaar_number.strip())
    return re.match(r"^[0-9]{12}$", cleaned_aadhaar) is not None


def mask_aadhaar(aadhaar_number: str) -> str:
    """Masks an Aadhaar number to show only last 4 digits."""
    return "XXXX XXXX " + aadhaar_number[-4:]


def press_keypad(entered: str, digit: str, max_length: int = NATIONAL_ID_LENGTH) -> str:
    """
    Append one on-screen keypad digit to the number entered so far.

    The keypad extends whatever is already recorded, typed or pressed. It
    never shortens it: a number that already holds `max_length` digits, or
    that contains anything but digits, must be cleared before the keypad
    can be used again.
    """
    if len(digit) != 1 or not digit.isdigit():
        raise InvalidInput(f"Keypad only accepts a single digit, got {digit!r}")
    if entered and not entered.isdigit():
        raise InvalidInput("The entered number contains non-digits; clear it before using the keypad")
    if len(entered) >= max_length:
        raise InvalidInput(f"The entered number already has {max_length} digits")
    return entered + digit


# -----------------------------------------------------------------------------
# DOCUMENT UPLOAD
# -----------------------------------------------------------------------------

def document_file_name(selected_path: str) -> str:
    """
    Reduce a selected file path to the file name recorded for Digilocker KYC.
    Raises InvalidInput when nothing was selected.
    """
    name = PurePath(selected_path.strip().replace("\\", "/")).name if selected_path else ""
    if not name:
        raise InvalidInput("No document file selected")
    return name
