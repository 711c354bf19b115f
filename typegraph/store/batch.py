"""Outcome of batch store operations."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, TypeVar

from ..typedef.errors import BatchOperationError, TypeDefStoreError

ItemT = TypeVar("ItemT")
ResultT = TypeVar("ResultT")


class BatchPolicy(str, Enum):
    """How a batch operation reacts to a failing item."""

    CONTINUE = "continue"  # log the failure, go on with the next item
    FAIL_FAST = "fail_fast"  # re-raise the first failure


@dataclass
class BatchFailure(Generic[ItemT]):
    """An input item together with the error it raised."""

    item: ItemT
    error: TypeDefStoreError

    def __str__(self) -> str:
        return f"{self.item}: {self.error}"


@dataclass
class BatchResult(Generic[ItemT, ResultT]):
    """Successes and failures of a batch operation, each in input order."""

    succeeded: list[ResultT] = field(default_factory=list)
    failed: list[BatchFailure[ItemT]] = field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        """Check if any item failed."""
        return len(self.failed) > 0

    @property
    def total(self) -> int:
        """Number of items processed."""
        return len(self.succeeded) + len(self.failed)

    def add_success(self, result: ResultT) -> None:
        self.succeeded.append(result)

    def add_failure(self, item: ItemT, error: TypeDefStoreError) -> None:
        self.failed.append(BatchFailure(item, error))

    def raise_for_failures(self) -> None:
        """Raise BatchOperationError if any item failed."""
        if self.has_failures:
            raise BatchOperationError(
                f"{len(self.failed)} of {self.total} item(s) failed", self.failed
            )
