"""Base checkout provider interface"""

from abc import ABC, abstractmethod
from pathlib import Path


class CheckoutProvider(ABC):
    """Turns revision specifiers into revisions and revisions into file trees

    Revision identifiers returned by ``resolve`` must be canonical: two
    specifiers naming the same content must resolve to the same string,
    since deployments compare them verbatim.
    """

    @abstractmethod
    def resolve(self, spec: str) -> str:
        """
        Resolve a revision specifier without touching the deploy root

        Args:
            spec: Branch, tag, symbolic ref or commit id

        Returns:
            Canonical revision identifier

        Raises:
            ResolutionError: If the specifier cannot be resolved
        """
        raise NotImplementedError("Subclasses must implement resolve()")

    @abstractmethod
    def checkout(self, revision: str, destination: Path) -> None:
        """
        Materialize a revision's tree into a new directory

        Whatever a failed checkout leaves in ``destination`` stays there;
        a later deployment of the same revision treats it as the release.

        Args:
            revision: Identifier previously returned by ``resolve``
            destination: Directory to create

        Raises:
            CheckoutError: If the tree cannot be materialized
        """
        raise NotImplementedError("Subclasses must implement checkout()")
