"""Exceptions raised by polaris."""


class ConfigurationError(ValueError):
    """Invalid option, shape or combination found while building an object.

    Raised at construction time and never recovered inside the package.
    """
