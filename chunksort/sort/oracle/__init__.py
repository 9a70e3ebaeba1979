from chunksort.sort.oracle.base import RankingOracle, check_permutation
from chunksort.sort.oracle.openai_listwise import OpenAiListwiseOracle
