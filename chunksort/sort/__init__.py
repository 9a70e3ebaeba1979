from chunksort.sort.common import SortConfiguration, sanitize_list
from chunksort.sort.sort_llm import build_oracle, sort_list, sort_many
