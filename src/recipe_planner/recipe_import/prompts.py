"""Prompt templates for AI recipe extraction."""

HTML_TRUNCATION_MARKER = "\n\n[HTML content truncated for processing...]"
PDF_TRUNCATION_MARKER = "\n\n[PDF content truncated...]"


def truncate(text: str, max_chars: int, marker: str) -> str:
    """Cut text to max_chars, appending marker when anything was dropped."""
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + marker


def build_html_prompt(html: str) -> str:
    return f"""Extract the recipe information from the following HTML content. Return ONLY valid JSON with this exact structure (no additional text or markdown):

{{
  "title": "Recipe name",
  "ingredients": ["ingredient 1", "ingredient 2", "ingredient 3"],
  "instructions": "Step-by-step cooking instructions",
  "imageUrl": "URL to recipe image if found, otherwise null",
  "tags": ["tag1", "tag2"]
}}

Requirements:
- ingredients must be an array of strings, one ingredient per entry
- instructions should be a single string with all steps
- tags should include cuisine type, meal type, or recipe categories if mentioned
- imageUrl should be a complete URL or null
- If the page does not contain a recipe, return {{"title": "", "ingredients": [], "instructions": ""}}

HTML content:
{html}"""


def build_pdf_prompt(pdf_text: str) -> str:
    return f"""Extract ALL recipes from the following PDF text. Return ONLY valid JSON (no markdown, no additional text) with this exact structure:

{{
  "recipes": [
    {{
      "title": "Recipe Name",
      "ingredients": ["ingredient 1", "ingredient 2", "ingredient 3"],
      "instructions": "Step-by-step cooking instructions as a single text block",
      "tags": ["tag1", "tag2"]
    }}
  ]
}}

Requirements:
- Extract ALL recipes found in the document (could be 1 to 20+ recipes)
- ingredients must be an array of strings, one ingredient per entry
- instructions must be a single string with all steps
- tags should include cuisine type, meal type, or categories if mentioned
- If a recipe is incomplete (missing ingredients or instructions), skip it
- If NO recipes are found, return {{"recipes": []}}

PDF Text:
{pdf_text}"""
