"""
Request schemas using Pydantic, validated at the boundary before reaching the engine.
"""
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional

from grocery.utilities import config


class GroceryItemInput(BaseModel):
    """Schema for a manually added or edited grocery item."""
    item_name: str = Field(..., min_length=1, max_length=200)
    unit: str = Field("", max_length=20)
    quantity: float = Field(..., ge=0, allow_inf_nan=False)
    note: Optional[str] = Field(None, max_length=200)
    date_added: Optional[str] = None

    @field_validator('item_name', 'unit')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v

    @field_validator('item_name')
    @classmethod
    def validate_name(cls, v):
        if not v:
            raise ValueError('Item name cannot be empty')
        return v


class GenerateFromRecipesRequest(BaseModel):
    """Schema for generating grocery items from recipes."""
    recipe_ids: List[int] = Field(default_factory=list)
    date: str = Field(..., min_length=1)
    name: Optional[str] = None


class GenerateFromMealPlansRequest(BaseModel):
    """Schema for generating grocery items from meal plans."""
    meal_plan_ids: List[int] = Field(default_factory=list)
    date: str = Field(..., min_length=1)


class ServingsUpdateRequest(BaseModel):
    servings: int

    @field_validator('servings')
    @classmethod
    def validate_range(cls, v):
        if not config.MIN_SERVINGS <= v <= config.MAX_SERVINGS:
            raise ValueError(f'Servings must be between {config.MIN_SERVINGS} and {config.MAX_SERVINGS}')
        return v


class PurchaseRequest(BaseModel):
    ids: List[int] = Field(default_factory=list)


class GroceryListRequest(BaseModel):
    """Schema for generating a named grocery list snapshot from recipes or one meal plan."""
    name: str = Field(..., min_length=1, max_length=200)
    date: str = Field(..., min_length=1)
    recipe_ids: Optional[List[int]] = None
    meal_plan_id: Optional[int] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError('Grocery list name cannot be empty')
        return v.strip()

    @model_validator(mode='after')
    def one_source(self):
        """Exactly one of recipe_ids / meal_plan_id must be given."""
        if (self.recipe_ids is None) == (self.meal_plan_id is None):
            raise ValueError('Provide either recipe_ids or meal_plan_id')
        return self
