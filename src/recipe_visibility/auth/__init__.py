"""Request authentication."""

from recipe_visibility.auth.api_key import RequireApiKey, require_api_key


__all__ = ["RequireApiKey", "require_api_key"]
