"""Describes the Cookbook domain. Centres around the `RecipeView`.

Recipes arrive fully joined from the repository: author, categories,
ingredients and steps. Everything downstream of that is read-only.

- `cookbook.pdf` turns a recipe into a printable PDF with no PDF library.
- `cookbook.services` holds the use cases the web layer calls.
- `cookbook.repository` is the only place that knows about SQL.
"""
