"""Order-preserving bounded parallel map with a skip sentinel.

Used by the orchestrator to run the assembler over raw items. Items are
independent, so running them on a small thread pool is safe; output order
always matches input order, and a mapper may return :data:`p_map_skip` to
leave its item out of the result.

``concurrency=1`` runs inline on the calling thread, without a pool.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor


class _Skip:
    __slots__ = ()

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return "p_map_skip"


# Sentinel value: mappers can `return p_map_skip` to omit the element.
p_map_skip: object = _Skip()


def p_map[InT, OutT](
    iterable: Iterable[InT],
    mapper: Callable[[InT], OutT | object],
    *,
    concurrency: int,
) -> list[OutT]:
    """Map ``iterable`` through ``mapper`` with at most ``concurrency`` workers.

    The first mapper exception propagates to the caller; work that has not
    started yet is cancelled.
    """

    if isinstance(concurrency, bool) or not isinstance(concurrency, int) or concurrency < 1:
        raise ValueError("concurrency must be a positive integer")

    items: Sequence[InT] = list(iterable)
    if concurrency == 1 or len(items) <= 1:
        mapped = [mapper(item) for item in items]
    else:
        with ThreadPoolExecutor(max_workers=min(concurrency, len(items))) as pool:
            futures = [pool.submit(mapper, item) for item in items]
            try:
                mapped = [f.result() for f in futures]
            except Exception:
                for f in futures:
                    f.cancel()
                raise

    return [v for v in mapped if v is not p_map_skip]  # type: ignore[misc]


__all__ = ["p_map", "p_map_skip"]
