"""Protocol definitions for the detector package.

Contains structural typing protocols that define interfaces for
cleaning steps, enabling better type checking and extensibility.
"""

from typing import Protocol

from bs4 import Tag


class CleaningFilter(Protocol):
    """Protocol defining the interface for clutter filters.

    Filters remove unwanted descendants from an already cloned subtree.

    Implementations should:
    - Mutate ``root`` in place and never remove ``root`` itself
    - Return how many subtrees were removed
    """

    def apply(self, root: Tag) -> int:
        """Remove clutter below ``root``.

        Args:
            root: Cloned subtree owned by the detector.

        Returns:
            Number of removed subtrees.

        """
        ...
