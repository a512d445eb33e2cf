from .api import ActionResult, RecipeShareClient
from .forms import IngredientRow, RecipeForm

__all__ = ["ActionResult", "IngredientRow", "RecipeForm", "RecipeShareClient"]
