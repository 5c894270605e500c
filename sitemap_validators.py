import math
import re

# Valid values allowed by the sitemap.xml protocol for change frequencies
VALID_FREQUENCY_VALUES = ["always", "hourly", "daily", "weekly", "monthly", "yearly", "never"]

# xsd:decimal, no exponent or digit separators
DECIMAL_RE = re.compile(r'^\s*[+-]?(\d+\.?\d*|\.\d+)\s*$')


def normalize_frequency(change_frequency):
    return str(change_frequency).strip().lower()


def valid_frequency(change_frequency):
    """Is the change frequency one of the protocol values (any case)?"""
    if not isinstance(change_frequency, str):
        return False
    return normalize_frequency(change_frequency) in VALID_FREQUENCY_VALUES


def valid_priority(priority):
    """Is the priority a decimal number between 0.0 and 1.0?

    Unparsable values are simply invalid, this never raises.
    """
    if isinstance(priority, bool) or priority is None:
        return False
    if isinstance(priority, str):
        if not DECIMAL_RE.match(priority):
            return False
    elif not isinstance(priority, (int, float)):
        return False
    priority_val = float(priority)
    if math.isnan(priority_val):
        return False
    return 0.0 <= priority_val <= 1.0


def format_priority(priority):
    """Text of a valid priority: strings as given, numbers as plain decimals."""
    if isinstance(priority, str):
        return priority.strip()
    text = f"{float(priority):.4f}".rstrip('0')
    return text + '0' if text.endswith('.') else text
