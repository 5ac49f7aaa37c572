"""
Advisory banners derived from cell tags.

Papermill marks parameter cells with reserved tags; those cells get a
banner. Banners never affect execution.
"""

from collections.abc import Iterable
from enum import Enum


class BannerKind(str, Enum):
    """Advisory banner shown above a cell."""
    PARAMETRIZED = "Papermill - Parametrized"
    DEFAULT_PARAMETERS = "Papermill - Default Parameters"

    @property
    def text(self) -> str:
        return self.value


# Checked in this order; each tag yields at most one banner.
BANNER_TAGS = [
    ("parameters", BannerKind.PARAMETRIZED),
    ("default parameters", BannerKind.DEFAULT_PARAMETERS),
]


def banners_for(tags: Iterable[str]) -> list[BannerKind]:
    """Return the banners for a tag set, in display order."""
    tags = frozenset(tags)
    return [banner for tag, banner in BANNER_TAGS if tag in tags]
