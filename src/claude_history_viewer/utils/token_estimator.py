"""Cost estimation from token counts."""


# Per 1M tokens
INPUT_COST_PER_MILLION = 3.00
OUTPUT_COST_PER_MILLION = 15.00


def calculate_cost(
    input_tokens: int,
    output_tokens: int,
    input_cost_per_million: float = INPUT_COST_PER_MILLION,
    output_cost_per_million: float = OUTPUT_COST_PER_MILLION,
) -> float:
    """Calculate cost in USD as a linear function of input and output tokens."""
    return (
        input_tokens * input_cost_per_million
        + output_tokens * output_cost_per_million
    ) / 1_000_000
