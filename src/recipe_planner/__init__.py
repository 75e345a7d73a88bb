"""
Recipe Planner - recipe import pipeline and grocery list helpers.

Components:
- recipe_import: URL and PDF recipe extraction (schema.org first, AI fallback)
- grocery: ingredient categorization, grouping, and shopping list export
- web: FastAPI endpoints wrapping the pipeline
"""

__version__ = "1.0.0"
