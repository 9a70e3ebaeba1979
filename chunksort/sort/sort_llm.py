import asyncio
import openai
from typing import Any, Iterable, List, Mapping, Sequence
from loguru import logger
from pydantic import ValidationError
from chunksort.config import Settings, settings as default_settings
from chunksort.inference.limited_async_openai import get_client
from chunksort.sort.common import SortConfiguration, sanitize_list
from chunksort.sort.errors import (
    OracleError,
    SortConfigurationError,
    SortError,
    SortFailedError,
    SortTimeoutError,
)
from chunksort.sort.oracle.base import RankingOracle
from chunksort.sort.oracle.openai_listwise import OpenAiListwiseOracle
from chunksort.sort.sorter.extremes import ExtremesSorter


def build_oracle(settings: Settings = default_settings) -> OpenAiListwiseOracle:
    try:
        client = get_client(
            api_key=settings.oracle.api_key,
            base_url=settings.oracle.api_url,
            max_concurrent_requests=settings.oracle.max_concurrent_requests,
            timeout=settings.oracle.timeout,
            retries=settings.oracle.transport_retries,
        )
    except openai.OpenAIError as e:
        # raised when neither oracle.api_key nor OPENAI_API_KEY is set
        raise SortConfigurationError(f"cannot build the oracle client: {e}") from e
    return OpenAiListwiseOracle(
        model_name=settings.oracle.model,
        client=client,
        retry_n=settings.oracle.retry_n,
        think=settings.oracle.think,
        capacity=settings.oracle.capacity,
    )


def resolve_config(
    config: SortConfiguration | Mapping[str, Any],
    oracle: RankingOracle,
) -> SortConfiguration:
    """
    Validate the sort options against each other and the oracle's capacity.
    """
    if not isinstance(config, SortConfiguration):
        try:
            config = SortConfiguration.model_validate(config)
        except ValidationError as e:
            raise SortConfigurationError(f"invalid sort configuration: {e}") from e
    capacity = oracle.capacity
    if capacity is not None and config.max_batch_size > capacity:
        raise SortConfigurationError(
            f"chunk_size={config.chunk_size} plus 2*extreme_k={2 * config.extreme_k} "
            f"exceeds the oracle capacity of {capacity} items per call"
        )
    return config


async def _run_sorter(
    sorter: ExtremesSorter[str],
    config: SortConfiguration,
    oracle: RankingOracle,
) -> List[str]:
    for need_sorted in sorter:
        iteration, window = sorter.iteration_index, sorter.window_index
        logger.debug(f"iteration {iteration + 1}/{config.iterations} window {window + 1}: ranking {len(need_sorted)} items")
        try:
            ranked = await oracle.rank(need_sorted, config.criterion, config.sort_order)
            sorter.submit_sorted(ranked)
        except Exception as e:
            # CancelledError is not an Exception, so the caller deadline still applies
            if not isinstance(e, OracleError):
                logger.warning(f"oracle raised {type(e).__name__}, treating it as unavailable")
            logger.error(f"sort aborted at iteration {iteration + 1} window {window + 1}: {e!r}")
            raise SortFailedError(
                f"oracle call failed at iteration {iteration + 1}, window {window + 1}: {e!r}",
                iteration=iteration,
                window=window,
            ) from e
    return sorter.get_result()


async def sort_list(
    items: Iterable[str],
    config: SortConfiguration | Mapping[str, Any],
    oracle: RankingOracle,
    timeout: float | None = None,
) -> List[str]:
    """
    Approximately sort items by config.criterion.

    The first and last extreme_k * iterations items are ranked by the oracle; the middle
    keeps whatever order the last sweep left it in. Returns a full permutation of the
    sanitized input, or raises: partial results are never returned.
    """
    config = resolve_config(config, oracle)
    sanitized = sanitize_list(items)
    sorter = ExtremesSorter(
        sanitized,
        chunk_size=config.chunk_size,
        extreme_k=config.extreme_k,
        iterations=config.iterations,
    )
    logger.info(
        f"sorting {len(sanitized)} items by {config.criterion!r} "
        f"(chunk_size={config.chunk_size}, extreme_k={config.extreme_k}, iterations={config.iterations})"
    )
    deadline = asyncio.timeout(timeout)
    try:
        async with deadline:
            result = await _run_sorter(sorter, config, oracle)
    except TimeoutError as e:
        if not deadline.expired():
            raise
        iteration, window = sorter.iteration_index, sorter.window_index
        logger.error(f"sort timed out after {timeout}s at iteration {iteration + 1} window {window + 1}")
        raise SortTimeoutError(
            f"sort timed out after {timeout}s at iteration {iteration + 1}, window {window + 1}",
            iteration=iteration,
            window=window,
        ) from e

    assert len(result) == len(sanitized), "sorted list lost or duplicated items"
    logger.info(f"sorted {len(result)} items by {config.criterion!r}")
    return result


async def sort_many(
    lists: Sequence[Iterable[str]],
    config: SortConfiguration | Mapping[str, Any],
    oracle: RankingOracle,
    max_concurrency: int = 8,
    timeout: float | None = None,
) -> List[List[str] | SortError]:
    """
    Sort independent lists concurrently. Each entry of the result is either the sorted
    list or the SortError that aborted that list.
    """
    config = resolve_config(config, oracle)
    semaphore = asyncio.Semaphore(max_concurrency)
    count = 0
    total = len(lists)

    async def sort_task(items: Iterable[str], idx: int) -> List[str] | SortError:
        nonlocal count
        try:
            async with semaphore:
                ret = await sort_list(items, config, oracle, timeout=timeout)
        except SortError as e:
            logger.error(f"sort failed for list {idx + 1}/{total}: {e}")
            return e
        count += 1
        logger.info(f"sort completed for list {idx + 1} ({count}/{total})")
        return ret

    return await asyncio.gather(*(sort_task(items, idx) for idx, items in enumerate(lists)))
