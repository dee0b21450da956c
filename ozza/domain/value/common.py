"""Base classes for value objects."""

from typing import Generic, TypeVar

from pydantic import ConfigDict, RootModel

T = TypeVar("T")

class RootValueObject(RootModel[T], Generic[T]):
    """Value object wrapping a single primitive (accessed via ``.root``)."""

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)
