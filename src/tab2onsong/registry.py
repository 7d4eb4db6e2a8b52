from .adapters.base import SiteAdapter
from .adapters.ultimate_guitar import UltimateGuitarAdapter
from .adapters.worshipchords import WorshipChordsAdapter
from .exceptions import UnsupportedSiteError

_ADAPTERS: list[type[SiteAdapter]] = [
    UltimateGuitarAdapter,
    WorshipChordsAdapter,
]


def get_adapter(url: str) -> SiteAdapter:
    """Return an instantiated adapter for the given URL.

    Raises UnsupportedSiteError if no adapter matches.
    """
    for cls in _ADAPTERS:
        if cls.can_handle(url):
            return cls()
    raise UnsupportedSiteError(url)
