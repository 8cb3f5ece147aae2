"""Prompt rendering for the generation step."""

from collections.abc import Sequence

NO_CONTEXT_PLACEHOLDER = "No specific documents found in vault."

GENERATION_PROMPT_TEMPLATE = """Instructions: Use the provided context to answer the question.
If the context is insufficient or the information is not present, use your internal knowledge to provide a direct and helpful answer.

IMPORTANT: Do NOT include any disclaimers like "The provided context does not contain..." or "According to the context...".
Start your response directly with the answer to the user's question.

Context:
{context}

User Question: {query}
"""


def build_generation_prompt(query: str, context: Sequence[str]) -> str:
    """Render the generation prompt for a query and its retrieved passages.

    Args:
        query: The user query
        context: Retrieved passages, possibly empty

    Returns:
        The prompt text sent to the generator
    """
    context_text = "\n".join(context) or NO_CONTEXT_PLACEHOLDER
    return GENERATION_PROMPT_TEMPLATE.format(context=context_text, query=query)
