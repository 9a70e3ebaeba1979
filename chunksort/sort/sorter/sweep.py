from dataclasses import dataclass, field
from typing import Generic, List, Optional
from chunksort.sort.common import T
from chunksort.sort.oracle.base import check_permutation


@dataclass
class SweepResult(Generic[T]):
    '''
    ChunkSweeper: list[T] -> SweepResult[T]
    the four lists are pairwise disjoint
    '''
    top: List[T] = field(default_factory=list)
    bottom: List[T] = field(default_factory=list)
    displaced_top: List[T] = field(default_factory=list)
    displaced_bottom: List[T] = field(default_factory=list)

    def members(self) -> set[T]:
        return set(self.top) | set(self.bottom) | set(self.displaced_top) | set(self.displaced_bottom)


class ChunkSweeper(Generic[T]):
    """
    One left-to-right pass over a list with a window of chunk_size items.
    Every window is handed out together with the extremes carried over from the
    previous window (window + current top + current bottom); the ranked batch must be
    submitted back before the next window can be requested. After each submission the
    first extreme_k items become the running top and the last extreme_k items the
    running bottom. Former extremes that lost their place are recorded as displaced,
    in the order they were bumped.
    Supports the iterator protocol, so it can be driven with a plain for loop.
    """

    def __init__(
        self,
        items: List[T],
        *,
        chunk_size: int,
        extreme_k: int,
    ):
        assert isinstance(items, list), "items must be a list"
        assert chunk_size > 0, "chunk_size must be positive"
        assert extreme_k > 0, "extreme_k must be positive"

        self._items = items
        self._n = len(items)
        self._chunk_size = chunk_size
        self._k = extreme_k

        self._start = 0  # first item of the next window
        self._window_idx = 0
        self._result: SweepResult[T] = SweepResult()
        self._pending: Optional[List[T]] = None
        self._finished = self._n == 0

    @property
    def window_index(self) -> int:
        return self._window_idx

    def __iter__(self):
        return self

    def __next__(self) -> List[T]:
        """
        Returns the next batch to rank; ends iteration once every window was ranked.
        Raises an error if called before the previous batch was submitted.
        """
        if self._finished:
            raise StopIteration
        if self._pending is not None:
            raise RuntimeError("Must submit the previous batch before requesting the next one.")

        window = self._items[self._start : self._start + self._chunk_size]
        self._pending = window + self._result.top + self._result.bottom
        return list(self._pending)

    def submit_sorted(self, ranked: List[T]) -> None:
        """
        Accepts the ranked batch (best fit first) and moves the running extremes.
        Raises OracleValidationError if ranked is not a permutation of the batch.
        """
        if self._finished:
            raise RuntimeError("Cannot submit: sweep already finished")
        if self._pending is None:
            raise RuntimeError("No batch awaiting submission.")

        check_permutation(self._pending, ranked)

        batch_top = ranked[: self._k]
        # the bottom never reaches into the top slice, so small batches keep the poles disjoint
        batch_bottom = ranked[max(len(batch_top), len(ranked) - self._k) :]
        kept = set(batch_top) | set(batch_bottom)

        result = self._result
        result.displaced_top.extend(x for x in result.top if x not in kept)
        result.displaced_bottom.extend(x for x in result.bottom if x not in kept)
        result.top = batch_top
        result.bottom = batch_bottom

        self._pending = None
        self._start += self._chunk_size
        self._window_idx += 1
        if self._start >= self._n:
            self._finished = True

    def get_result(self) -> SweepResult[T]:
        if not self._finished:
            raise RuntimeError("Sweep not finished yet")
        return self._result
