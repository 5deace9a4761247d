"""Sheet ordering indexes."""
import itertools

# Below any explicit index callers are likely to pass, so that sheets created
# without one are inserted before explicitly ordered sheets.
INITIAL_INDEX = -1_000_000_000


class SheetIndexAllocator:
    """Hands out strictly increasing sheet indexes."""

    def __init__(self, start: int = INITIAL_INDEX):
        self._counter = itertools.count(start)

    def next(self) -> int:
        return next(self._counter)


_allocator = SheetIndexAllocator()


def next_sheet_index() -> int:
    """Next index from the process-wide allocator. Never reset."""
    return _allocator.next()
