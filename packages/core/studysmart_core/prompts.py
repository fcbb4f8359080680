"""Prompt templates for the generation service."""

SUMMARY_SYSTEM_PROMPT = "You are a study assistant that writes concise revision notes."

SUMMARY_PROMPT = """Summarize the following text in bullet points for easy revision.
Keep every key definition, date, and named concept.

Text:
{text}
"""

FLASHCARDS_SYSTEM_PROMPT = (
    "You are an expert at creating effective study flashcards. Output valid JSON only."
)

FLASHCARDS_PROMPT = """Based on the following text, generate a list of question/answer flashcards.

Rules:
1. One fact per card
2. Questions must be answerable from the text alone
3. Answers should be short and specific

Text:
{text}

Output format (JSON object):
{{
  "cards": [
    {{"question": "What is the capital of France?", "answer": "Paris"}}
  ]
}}
"""


def truncate_text(text: str, max_chars: int) -> str:
    """Cap text at max_chars characters, discarding the remainder."""
    if max_chars <= 0 or len(text) <= max_chars:
        return text
    return text[:max_chars]
