"""Recipe Visibility Service.

Keeps publish flags consistent across recipes that reference each other
through PTN sub-recipe lines.
"""

__version__ = "0.1.0"
