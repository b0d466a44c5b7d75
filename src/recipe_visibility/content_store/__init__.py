"""Content store (Sanity) read client and write channels."""

from recipe_visibility.content_store.channels import (
    SanityWriteChannel,
    WriteChannel,
    WriteOutcome,
    WriteOutcomeKind,
    build_write_channels,
)
from recipe_visibility.content_store.client import ContentStoreClient
from recipe_visibility.content_store.exceptions import (
    ContentStoreConfigurationError,
    ContentStoreError,
    ContentStoreResponseError,
    ContentStoreTimeoutError,
    ContentStoreUnavailableError,
)
from recipe_visibility.content_store.protocol import CatalogReader, RecipeReader
from recipe_visibility.content_store.schemas import (
    CatalogRecipeRow,
    IngredientLine,
    RecipeTitleRow,
    RecipeVisibilityRow,
    RelationRecipe,
    Visibility,
)


__all__ = [
    "CatalogReader",
    "CatalogRecipeRow",
    "ContentStoreClient",
    "ContentStoreConfigurationError",
    "ContentStoreError",
    "ContentStoreResponseError",
    "ContentStoreTimeoutError",
    "ContentStoreUnavailableError",
    "IngredientLine",
    "RecipeReader",
    "RecipeTitleRow",
    "RecipeVisibilityRow",
    "RelationRecipe",
    "SanityWriteChannel",
    "Visibility",
    "WriteChannel",
    "WriteOutcome",
    "WriteOutcomeKind",
    "build_write_channels",
]
