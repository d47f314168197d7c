"""Tab positions of the information screen."""
from enum import IntEnum


class InformationPage(IntEnum):
    FAQ = 0
    SPEAKERS = 1
    VENDORS = 2


def page_for_tab(position: int) -> InformationPage:
    """
    Map a tab position to its page.

    Raises:
        IndexError: The tab set and the known pages disagree
    """
    try:
        return InformationPage(position)
    except ValueError:
        raise IndexError(f"Position out of bounds: {position}") from None
