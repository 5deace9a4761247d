from sheetkit.core.index import INITIAL_INDEX, SheetIndexAllocator, next_sheet_index


def test_allocator_is_strictly_increasing() -> None:
    allocator = SheetIndexAllocator()
    values = [allocator.next() for _ in range(5)]
    assert values[0] == INITIAL_INDEX
    assert values == sorted(set(values))


def test_allocator_custom_start() -> None:
    allocator = SheetIndexAllocator(10)
    assert allocator.next() == 10
    assert allocator.next() == 11


def test_process_wide_allocator_never_repeats() -> None:
    first = next_sheet_index()
    second = next_sheet_index()
    assert second > first
    assert first >= INITIAL_INDEX
