import logging
from collections.abc import Iterable

from .models import Placement, RegisteredEntry

logger = logging.getLogger(__name__)


class EntryRegistry:
    def __init__(self):
        self.entries: dict[str, RegisteredEntry] = {}

    def register(
        self,
        handle: str,
        entry_id: str,
        dependencies: Iterable[str] = (),
        placement: Placement | str = Placement.FOOTER,
    ) -> "EntryRegistry":
        if handle in self.entries:
            logger.debug("Overwriting registered entry %s", handle)
        self.entries[handle] = RegisteredEntry(
            entry_id=entry_id,
            dependencies=list(dependencies),
            placement=Placement(placement),
        )
        return self

    def get(self, handle: str) -> RegisteredEntry | None:
        return self.entries.get(handle)

    def __contains__(self, handle: str) -> bool:
        return handle in self.entries

    def __len__(self) -> int:
        return len(self.entries)
