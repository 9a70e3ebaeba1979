import json
import re
from typing import List, Optional
import httpx
import openai
from openai import AsyncOpenAI
from loguru import logger
from chunksort.sort.common import SortOrder
from chunksort.sort.errors import OracleUnavailableError, OracleValidationError
from chunksort.sort.oracle.base import RankingOracle, check_permutation
from chunksort.sort.prompt import (
    ORDER_DESCRIPTION,
    ordinary_system,
    ordinary_user,
    reasoning_system,
    reasoning_user,
)


def feed_into_prompt(
    prompt_template: str,
    criterion: str,
    items: list[str],
    sort_order: SortOrder,
) -> str:
    items_string = "".join(f"- {json.dumps(item, ensure_ascii=False)}\n" for item in items)
    return prompt_template.format(
        criterion=criterion,
        items=items_string,
        num=len(items),
        order_description=ORDER_DESCRIPTION[sort_order],
    )


class OpenAiListwiseOracle(RankingOracle):
    def __init__(
        self,
        model_name: str,
        client: AsyncOpenAI,
        retry_n: int,
        think: bool,
        capacity: Optional[int] = None,
    ):
        assert retry_n > 0, "retry_n must be positive"
        self.model_name = model_name
        self.client = client
        self.retry_n = retry_n
        self.think = think
        self.capacity = capacity
        self.qwen3 = model_name.startswith("Qwen3")
        if think:
            self.system_prompt = reasoning_system
            self.user_prompt_template = reasoning_user
        else:
            self.system_prompt = ordinary_system
            self.user_prompt_template = ordinary_user
        if self.qwen3:
            # Qwen3 thinks through chat_template_kwargs, not through the prompt
            self.system_prompt = ordinary_system
            self.user_prompt_template = ordinary_user

    async def chat(self, messages) -> Optional[str]:
        try:
            response = await self.client.chat.completions.create(
                model=self.model_name,
                messages=messages,
                extra_body={"chat_template_kwargs": {"enable_thinking": self.think}} if self.qwen3 else None,
            )
        except (openai.APIError, httpx.HTTPError) as e:
            raise OracleUnavailableError(f"ranking request to {self.model_name} failed: {e}") from e
        if not response.choices:
            return None
        return response.choices[0].message.content

    def create_prompt(
        self,
        items: List[str],
        criterion: str,
        sort_order: SortOrder,
    ):
        user_prompt = feed_into_prompt(
            prompt_template=self.user_prompt_template,
            criterion=criterion,
            items=items,
            sort_order=sort_order,
        )
        messages = [{
            'role': 'system',
            'content': self.system_prompt
        }, {
            'role': 'user',
            'content': user_prompt
        }]
        return messages

    def parse_llm_result(
        self,
        response: str,
        items: List[str],
    ) -> List[str]:
        # Extract content within <answer> tags
        answer_match = re.search(r'<answer>(.*?)</answer>', response, re.DOTALL)
        if not answer_match:
            logger.warning("no answer tag in response")
            raise OracleValidationError(f"no match where response={response[:200]}")

        content = answer_match.group(1).strip()
        try:
            ranked = json.loads(content)
        except json.JSONDecodeError as e:
            logger.warning(f"answer is not valid JSON: {e}")
            raise OracleValidationError(f"answer is not a JSON array: {content[:200]}") from e

        if not isinstance(ranked, list) or not all(isinstance(it, str) for it in ranked):
            raise OracleValidationError("answer must be a JSON array of strings")

        check_permutation(items, ranked)
        return ranked

    async def rank(
        self,
        items: list[str],
        criterion: str,
        sort_order: SortOrder = "descending",
    ) -> list[str]:
        if len(items) <= 1:
            return list(items)
        messages = self.create_prompt(items=items, criterion=criterion, sort_order=sort_order)
        last_error: Optional[OracleValidationError] = None
        for i in range(self.retry_n):
            res = await self.chat(messages)
            try:
                if res is None:
                    raise OracleValidationError("empty response")
                return self.parse_llm_result(res, items)
            except OracleValidationError as e:
                last_error = e
                logger.warning(f"Ranking failed in {i+1}/{self.retry_n}: {e}")
        logger.warning(f"Ranking failed after {self.retry_n} tries.")
        raise OracleValidationError(f"no valid ranking after {self.retry_n} tries: {last_error}") from last_error
