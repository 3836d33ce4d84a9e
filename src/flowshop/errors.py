"""Error taxonomy shared by the loaders and every solver."""

from __future__ import annotations


class FlowShopError(ValueError):
    """Base class for all recoverable scheduling errors."""


class DimensionMismatch(FlowShopError):
    """Job rows of unequal length, or a permutation of the wrong length."""


class InvalidPermutation(FlowShopError):
    """Duplicate or out-of-range job index in a permutation."""


class WrongMachineCount(FlowShopError):
    """Algorithm called on an instance with an unsupported number of machines."""


class TooManyJobs(FlowShopError):
    """Exact search requested above the job-count ceiling."""

    def __init__(self, n: int, limit: int) -> None:
        super().__init__(f"{n} jobs exceeds the exact-search limit of {limit}")
        self.n = n
        self.limit = limit


class MalformedInput(FlowShopError):
    """Instance text could not be parsed."""


__all__ = [
    "FlowShopError",
    "DimensionMismatch",
    "InvalidPermutation",
    "WrongMachineCount",
    "TooManyJobs",
    "MalformedInput",
]
