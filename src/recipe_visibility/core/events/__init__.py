"""Application lifecycle events."""

from recipe_visibility.core.events.lifespan import lifespan


__all__ = ["lifespan"]
