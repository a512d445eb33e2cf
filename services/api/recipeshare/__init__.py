"""RecipeShare API: recipe sharing, meal planning and shopping lists."""

__version__ = "0.1.0"
