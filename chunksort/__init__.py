from chunksort.sort.common import SortConfiguration, SortResultSaving, load_items, sanitize_list
from chunksort.sort.errors import (
    OracleUnavailableError,
    OracleValidationError,
    SortConfigurationError,
    SortError,
    SortFailedError,
    SortTimeoutError,
)
from chunksort.sort.oracle.base import RankingOracle
from chunksort.sort.sort_llm import build_oracle, sort_list, sort_many
