from __future__ import annotations

from typing import Dict, List

PROMPTS = {
    "de": {
        "system": """You are a German language expert. Analyze German words and provide detailed grammatical information in Russian language.
Always respond in JSON format matching the WordAnalysis type with the following structure:
{{
  "grammarDetailsAndUsage": "string",
  "example": {{
    "german": "string",
    "russian": "string"
  }}
}}
grammarDetailsAndUsage should have html text, add line breaks, highlight important things with italics, color or bold.""",
        "analysis": """Analyze the German word "{word}" in this context: "{context}".
Provide:
1. Base form with article for nouns or reflexive for verbs
2. Usage in the given context
3. Detailed grammar form explanation
4. Connected words (prepositions, articles, etc.)
5. One clear example: German sentence and Russian translation

Ensure the response is a valid JSON object matching the specified structure.""",
    },
}


def build_word_analysis_prompt(word: str, context: str, lang: str = "de") -> List[Dict[str, str]]:
    """Two-message chat prompt asking for a WordAnalysis JSON object."""
    prompt = PROMPTS[lang]
    return [
        {"role": "system", "content": prompt["system"].format()},
        {"role": "user", "content": prompt["analysis"].format(word=word, context=context)},
    ]
