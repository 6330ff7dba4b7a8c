from __future__ import annotations

import threading
import time

from retrofont.glyph import Char, Glyph
from retrofont.lazy import LazyGlyphSource, OnceCell


def test_once_cell_initialises_once() -> None:
    cell: OnceCell[int] = OnceCell()
    calls: list[int] = []

    def factory() -> int:
        calls.append(1)
        return 42

    assert not cell.is_set
    assert cell.get() is None
    assert cell.get_or_init(factory) == 42
    assert cell.get_or_init(factory) == 42
    assert cell.is_set
    assert cell.get() == 42
    assert len(calls) == 1


def test_once_cell_concurrent_readers_share_one_value() -> None:
    cell: OnceCell[object] = OnceCell()
    barrier = threading.Barrier(8)
    calls: list[int] = []
    results: list[object] = []
    results_lock = threading.Lock()

    def factory() -> object:
        calls.append(1)
        time.sleep(0.01)
        return object()

    def worker() -> None:
        barrier.wait()
        value = cell.get_or_init(factory)
        with results_lock:
            results.append(value)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(calls) == 1
    assert len(results) == 8
    assert all(result is results[0] for result in results)


def test_lazy_source_decodes_each_slot_once() -> None:
    decoded: list[int] = []

    def decoder(data: bytes, offset: int) -> Glyph:
        decoded.append(offset)
        return Glyph.from_parts([Char(chr(data[offset]))])

    source = LazyGlyphSource(b"xyz", [0, None, 2], decoder)

    assert len(source) == 3
    assert source.has(0) and not source.has(1) and not source.has(5)
    assert source.get(1) is None
    assert source.get(7) is None
    assert source.get(-1) is None
    assert not source.is_decoded(2)

    glyph = source.get(2)

    assert glyph.parts == (Char("z"),)
    assert source.get(2) is glyph
    assert source.is_decoded(2)
    assert not source.is_decoded(0)
    assert decoded == [2]
