"""Load outcomes and the recovery policy applied when a load fails."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Generic, TypeVar

from chunkrealm.core.enums import LoadFailure, RecoveryPolicy

if TYPE_CHECKING:
    from chunkrealm.config import RealmConfig

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DataLoadError(Exception):
    """A data file could not be loaded and the policy says not to continue."""

    def __init__(self, failure: LoadFailure, path: str, detail: str) -> None:
        super().__init__(f"{failure.name} {path}: {detail}")
        self.failure = failure
        self.path = path
        self.detail = detail


@dataclass(frozen=True, slots=True)
class LoadResult(Generic[T]):
    """Either a loaded value or the reason it could not be loaded."""

    path: str
    value: T | None = None
    failure: LoadFailure | None = None
    detail: str = ""

    @classmethod
    def success(cls, path: str, value: T) -> LoadResult[T]:
        return cls(path=path, value=value)

    @classmethod
    def failed(cls, path: str, failure: LoadFailure, detail: str) -> LoadResult[T]:
        return cls(path=path, failure=failure, detail=detail)

    @property
    def ok(self) -> bool:
        return self.failure is None

    def unwrap(self) -> T:
        if self.failure is not None:
            raise DataLoadError(self.failure, self.path, self.detail)
        return self.value  # type: ignore[return-value]


class RecoveryTable:
    """Maps each LoadFailure kind to the RecoveryPolicy that handles it."""

    __slots__ = ("_policies",)

    def __init__(self, policies: dict[LoadFailure, RecoveryPolicy] | None = None) -> None:
        self._policies: dict[LoadFailure, RecoveryPolicy] = {
            LoadFailure.MISSING_FILE: RecoveryPolicy.SUBSTITUTE_DEFAULT,
            LoadFailure.MALFORMED_DATA: RecoveryPolicy.SUBSTITUTE_DEFAULT,
        }
        if policies:
            self._policies.update(policies)

    @classmethod
    def from_config(cls, config: RealmConfig) -> RecoveryTable:
        return cls({
            LoadFailure.MISSING_FILE: config.on_missing_file,
            LoadFailure.MALFORMED_DATA: config.on_malformed_data,
        })

    @classmethod
    def uniform(cls, policy: RecoveryPolicy) -> RecoveryTable:
        return cls({kind: policy for kind in LoadFailure})

    def policy_for(self, failure: LoadFailure) -> RecoveryPolicy:
        return self._policies[failure]

    def resolve(self, result: LoadResult[T], default_factory: Callable[[], T]) -> T | None:
        """Return the loaded value, or recover from the failure per policy.

        SUBSTITUTE_DEFAULT returns ``default_factory()``, SKIP returns None,
        RAISE raises DataLoadError.
        """
        if result.ok:
            return result.value
        assert result.failure is not None
        policy = self._policies[result.failure]
        if policy == RecoveryPolicy.RAISE:
            raise DataLoadError(result.failure, result.path, result.detail)
        if policy == RecoveryPolicy.SKIP:
            logger.warning("Skipping %s (%s): %s", result.path, result.failure.name, result.detail)
            return None
        logger.warning("Using default for %s (%s): %s", result.path, result.failure.name, result.detail)
        return default_factory()
