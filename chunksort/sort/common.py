from pathlib import Path
from typing import Hashable, Iterable, Literal, TypeVar
from loguru import logger
from pydantic import BaseModel, Field

T = TypeVar("T", bound=Hashable)

SortOrder = Literal["ascending", "descending"]

DEFAULT_CHUNK_SIZE = 10
DEFAULT_EXTREME_K = 10
DEFAULT_ITERATIONS = 1


class SortConfiguration(BaseModel):
    '''
    criterion: what "better" means for the oracle
    chunk_size: new items per oracle call, carried extremes not included
    extreme_k: items kept at each pole after every call
    iterations: number of full sweeps over the middle
    '''
    criterion: str = Field(min_length=1)
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, gt=0)
    extreme_k: int = Field(default=DEFAULT_EXTREME_K, gt=0)
    iterations: int = Field(default=DEFAULT_ITERATIONS, ge=0)
    sort_order: SortOrder = "descending"

    @property
    def max_batch_size(self) -> int:
        # a window plus both carried poles
        return self.chunk_size + 2 * self.extreme_k


class SortResultSaving(BaseModel):
    config: SortConfiguration
    items: list[str]


def is_blank(item) -> bool:
    if item is None:
        return True
    return isinstance(item, str) and item.strip() == ""


def sanitize_list(items: Iterable[T]) -> list[T]:
    """
    Drop blank entries and collapse duplicates to their first occurrence.
    """
    seen: set[T] = set()
    result: list[T] = []
    for item in items:
        if is_blank(item) or item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result


def load_items(path: Path) -> list[str]:
    with open(path, "r", encoding="utf8") as f:
        lines = [line.rstrip("\n") for line in f]
    items = sanitize_list(lines)
    logger.info(f"loaded {len(items)} items from {path} ({len(lines) - len(items)} blank or duplicate lines dropped)")
    return items
