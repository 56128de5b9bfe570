import re
from typing import Optional, Tuple

SECTION_PATTERN = re.compile(r"^\d{2,3}_[A-Z]$")
BATCH_PATTERN = re.compile(r"^\d+$")


def is_valid_section(section: str) -> bool:
    """'63_A' -> True, '63A' / '63_a' -> False"""
    return bool(section and SECTION_PATTERN.match(section))


def is_valid_batch(batch: str) -> bool:
    return bool(batch and BATCH_PATTERN.match(batch))


def split_section(section: Optional[str]) -> Tuple[Optional[str], Optional[str]]:
    """
    "63_A" -> ("63", "A")
    "63"   -> ("63", None)
    """
    if not section:
        return None, None
    batch, _, letter = section.partition("_")
    return (batch or None), (letter or None)


def batch_of(section: Optional[str]) -> Optional[str]:
    return split_section(section)[0]


def make_section(batch: str, letter: str) -> str:
    return f"{batch}_{letter}"
