from typing import Generic, List, Optional
from loguru import logger
from chunksort.sort.common import T
from chunksort.sort.sorter.sweep import ChunkSweeper, SweepResult


def assemble_result(top: List[T], middle: List[T], bottom: List[T]) -> List[T]:
    return top + middle + bottom


def recombine_middle(middle: List[T], sweep: SweepResult[T]) -> List[T]:
    """
    Items that fell out of contention rejoin the middle at the edge they were last seen on.
    """
    taken = sweep.members()
    rest = [x for x in middle if x not in taken]
    return sweep.displaced_top + rest + sweep.displaced_bottom


class ExtremesSorter(Generic[T]):
    """
    Approximate sorter that only has to rank chunk_size + 2 * extreme_k items at once.

    Runs a fixed number of ChunkSweeper passes. After each pass the surviving top is
    appended to the permanent top and the surviving bottom is prepended to the permanent
    bottom, so earlier passes stay outermost. Everything else forms the middle for the
    next pass, with displaced items placed at the edges. The middle of the final result
    is left unordered.

    Like the sweeper it supports the iterator protocol: each __next__ yields a batch to
    rank and submit_sorted takes the ranked batch back.
    """

    def __init__(
        self,
        items: List[T],
        *,
        chunk_size: int,
        extreme_k: int,
        iterations: int,
    ):
        assert isinstance(items, list), "items must be a list"
        assert iterations >= 0, "iterations must be a non-negative integer"

        self._chunk_size = chunk_size
        self._k = extreme_k
        self._iterations = iterations

        self._top: List[T] = []
        self._middle: List[T] = list(items)
        self._bottom: List[T] = []

        self._iteration = 0
        self._sweeper: Optional[ChunkSweeper[T]] = None
        self._finished = iterations == 0
        if not self._finished:
            self._sweeper = self._new_sweeper()

    def _new_sweeper(self) -> ChunkSweeper[T]:
        return ChunkSweeper(self._middle, chunk_size=self._chunk_size, extreme_k=self._k)

    @property
    def iteration_index(self) -> int:
        return self._iteration

    @property
    def window_index(self) -> int:
        return self._sweeper.window_index if self._sweeper is not None else 0

    def __iter__(self):
        return self

    def __next__(self) -> List[T]:
        while not self._finished:
            assert self._sweeper is not None
            try:
                return next(self._sweeper)
            except StopIteration:
                self._promote()
        raise StopIteration

    def submit_sorted(self, ranked: List[T]) -> None:
        if self._finished or self._sweeper is None:
            raise RuntimeError("Sorting is already finished. Cannot submit.")
        self._sweeper.submit_sorted(ranked)

    def _promote(self) -> None:
        assert self._sweeper is not None
        sweep = self._sweeper.get_result()
        self._top = self._top + sweep.top
        self._bottom = sweep.bottom + self._bottom
        self._middle = recombine_middle(self._middle, sweep)
        logger.info(
            f"sweep {self._iteration + 1}/{self._iterations} done: "
            f"promoted {len(sweep.top)} top / {len(sweep.bottom)} bottom, "
            f"displaced {len(sweep.displaced_top)} top / {len(sweep.displaced_bottom)} bottom, "
            f"middle={len(self._middle)}"
        )

        self._iteration += 1
        if self._iteration >= self._iterations:
            self._finished = True
            self._sweeper = None
        else:
            self._sweeper = self._new_sweeper()

    def get_result(self) -> List[T]:
        if not self._finished:
            raise RuntimeError("Sorting not finished yet.")
        return assemble_result(self._top, self._middle, self._bottom)
