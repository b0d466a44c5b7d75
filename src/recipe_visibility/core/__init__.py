"""Core application components: configuration, exceptions, lifecycle, middleware."""
