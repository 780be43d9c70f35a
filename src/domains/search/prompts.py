"""
Prompt template for the structured search answer.

The model is told the exact JSON shape to emit. The normalizer still has to
cope with prose wrapped around it.
"""

SEARCH_PROMPT_TEMPLATE = """Please provide a comprehensive answer to the following question and suggest related questions with their answers. Respond with ONLY a JSON object, no text before or after it, using exactly this structure:

{{
  "direct_answer": "Your detailed answer here",
  "people_also_ask": [
    {{
      "question": "Related question 1",
      "answer": "Brief answer to question 1"
    }},
    {{
      "question": "Related question 2",
      "answer": "Brief answer to question 2"
    }},
    {{
      "question": "Related question 3",
      "answer": "Brief answer to question 3"
    }},
    {{
      "question": "Related question 4",
      "answer": "Brief answer to question 4"
    }},
    {{
      "question": "Related question 5",
      "answer": "Brief answer to question 5"
    }}
  ]
}}

Question: {query}

Rules:
- "direct_answer" must be plain prose that answers the question directly. Do not mention JSON, field names, formatting, or these instructions, and do not put braces, brackets or code fences inside it.
- "people_also_ask" must contain exactly 5 items, each a relevant follow-up question with a concise but informative answer.
- Do not wrap the JSON in Markdown code fences and do not add comments or trailing commas."""


def build_search_prompt(query: str) -> str:
    return SEARCH_PROMPT_TEMPLATE.format(query=query.strip())
