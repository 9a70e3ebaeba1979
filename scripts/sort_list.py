import asyncio

from loguru import logger
from chunksort.config import settings, init_log
from chunksort.sort.common import SortConfiguration, SortResultSaving, load_items
from chunksort.sort.sort_llm import build_oracle, sort_list


def main():
    init_log()
    items = load_items(settings.sort.input_file)
    config = SortConfiguration(
        criterion=settings.sort.criterion,
        chunk_size=settings.sort.chunk_size,
        extreme_k=settings.sort.extreme_k,
        iterations=settings.sort.iterations,
        sort_order=settings.sort.sort_order,
    )
    oracle = build_oracle(settings)

    logger.info("Sorting...")
    sorted_items = asyncio.run(sort_list(items, config, oracle, timeout=settings.sort.timeout))

    saving_result = SortResultSaving(config=config, items=sorted_items)
    settings.sort.output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(settings.sort.output_file, "w") as f:
        f.write(saving_result.model_dump_json(indent=4))
    logger.info(f"wrote {len(sorted_items)} items to {settings.sort.output_file}")


if __name__ == "__main__":
    main()
