reasoning_system = "A conversation between User and Assistant. The user asks a question, and the Assistant solves it. The assistant first thinks about the reasoning process in the mind and then provides the user with the answer. The reasoning process and answer are enclosed within <think> </think> and <answer> </answer> tags, respectively, i.e., <think> reasoning process here </think> <answer> answer here </answer>."
ordinary_system = "A conversation between User and Assistant. The user asks a question, and the Assistant solves it. The assistant provides the user with the answer enclosed within <answer> </answer> tags, i.e., <answer> answer here </answer>."

ORDER_DESCRIPTION = {
    "descending": "from the item that best satisfies the criterion to the item that satisfies it least",
    "ascending": "from the item that satisfies the criterion least to the item that best satisfies it",
}

reasoning_user = """
Sorting Criterion:
"{criterion}"

Items:
{items}
Task:

Please sort the N={num} items above {order_description}.

Requirements:
1. Judge every item only against the sorting criterion;
2. Copy each item exactly as it is written, as a JSON string;
3. Make sure the result contains every item exactly once, with no additions or omissions.

Strict Output Format:

<think>
Ordering reasoning ...
</think>
<answer>["First item", "Second item", ..., "Last item"]</answer>

Example:
If the criterion is "sweetest", the items are "lemon", "honey" and "apple" and they are sorted from sweetest to least sweet, your answer should look like this: <think> reasoning process here </think> <answer>["honey", "apple", "lemon"]</answer>.
"""

ordinary_user = """
Sorting Criterion:
"{criterion}"

Items:
{items}
Task:

Please sort the N={num} items above {order_description}.

Requirements:
1. Judge every item only against the sorting criterion;
2. Copy each item exactly as it is written, as a JSON string;
3. Make sure the result contains every item exactly once, with no additions or omissions.

Strict Output Format:

<answer>["First item", "Second item", ..., "Last item"]</answer>

Example:
If the criterion is "sweetest", the items are "lemon", "honey" and "apple" and they are sorted from sweetest to least sweet, your answer should look like this: <answer>["honey", "apple", "lemon"]</answer>.
"""
