from abc import ABC, abstractmethod
from collections import Counter
from typing import Hashable, Optional, Sequence
from chunksort.sort.common import SortOrder
from chunksort.sort.errors import OracleValidationError


def check_permutation(expected: Sequence[Hashable], answer: Sequence[Hashable]) -> None:
    """
    Raise OracleValidationError unless answer holds exactly the items of expected.
    """
    if len(answer) != len(expected):
        raise OracleValidationError(f"expected {len(expected)} items but the oracle returned {len(answer)}")
    missing = Counter(expected) - Counter(answer)
    extra = Counter(answer) - Counter(expected)
    if missing or extra:
        raise OracleValidationError(
            f"oracle answer is not a permutation of the request: "
            f"missing={list(missing)[:5]} unexpected={list(extra)[:5]}"
        )


class RankingOracle(ABC):
    """
    Reorders a bounded list of items by how well they fit a criterion.
    Implementations own prompting, parsing and retrying; the returned list must be a
    permutation of the given items.
    """

    # Largest batch a single call can take, None if unbounded.
    capacity: Optional[int] = None

    @abstractmethod
    async def rank(
        self,
        items: list[str],
        criterion: str,
        sort_order: SortOrder = "descending",
    ) -> list[str]:
        """
        Return items ordered by fit to criterion; "descending" puts the best fit first.
        """
        pass
