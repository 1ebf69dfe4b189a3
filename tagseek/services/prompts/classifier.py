"""Prompts for the per-record boolean classifier."""


def get_system_message(predicate: str) -> str:
    """Classifier system message for one predicate.

    Args:
        predicate: Natural-language condition each tag is tested against

    Returns:
        System message asking for a bare boolean answer
    """
    return f"""You will be given a single ctags tag as a JSON object. Decide whether the following statement is true for that tag:

{predicate}

Answer with exactly one word: true or false. Do not add punctuation, quotes, or any explanation; your answer will be parsed by a computer."""


LOWERCASE_REPAIR_MESSAGE = (
    "Your answer must be lowercase. Respond with exactly `true` or `false`."
)

BOOLEAN_REPAIR_MESSAGE = (
    "Your answer could not be parsed as a boolean. "
    "Respond with exactly one word: `true` or `false`."
)
