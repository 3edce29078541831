"""
Core types for composable privacy operations.

Primitives are the unit of composition: a descriptor plus an async
``execute(input) -> output`` capability. Inputs and outputs are plain
dictionaries so that one step's output can be merged into the next step's
input.
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, Dict, List, Optional, Protocol, Union

from .models import RemoteResult

PrivacyInput = Dict[str, Any]
PrivacyOutput = Dict[str, Any]

# Handlers may be plain functions or coroutines
Handler = Callable[[PrivacyInput], Union[Awaitable[PrivacyOutput], PrivacyOutput]]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


async def maybe_await(value: Any) -> Any:
    """Await ``value`` if it is awaitable, otherwise return it unchanged."""
    if inspect.isawaitable(value):
        return await value
    return value


class RemoteInvoker(Protocol):
    """The single boundary to the remote privacy service."""

    async def invoke(self, endpoint: str, payload: Dict[str, Any]) -> RemoteResult:
        ...


class PrivacyPrimitive(ABC):
    """
    Base class for every registrable privacy operation.

    Subclasses set the descriptive class attributes and implement
    ``execute``. ``dependencies`` is advisory only and never enforced.
    ``execute`` should be safe to retry; the core itself never retries.
    """

    id: str
    name: str
    description: str = ""
    category: str = "custom"
    version: str = "1.0.0"
    author: str = ""
    tags: tuple[str, ...] = ()
    dependencies: tuple[str, ...] = ()
    inputs: Optional[Dict[str, Any]] = None
    outputs: Optional[Dict[str, Any]] = None

    @abstractmethod
    async def execute(self, input: PrivacyInput) -> PrivacyOutput:
        """Run the operation against ``input`` and return its output fields."""

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r} category={self.category!r}>"


@dataclass(eq=False, repr=False)
class PrimitiveDefinition(PrivacyPrimitive):
    """A primitive assembled from a handler callable (sync or async)."""

    id: str
    name: str
    handler: Handler
    description: str = ""
    category: str = "custom"
    version: str = "1.0.0"
    author: str = ""
    tags: tuple[str, ...] = ()
    dependencies: tuple[str, ...] = ()
    inputs: Optional[Dict[str, Any]] = None
    outputs: Optional[Dict[str, Any]] = None

    async def execute(self, input: PrivacyInput) -> PrivacyOutput:
        return await maybe_await(self.handler(input))


@dataclass(frozen=True)
class OperationRef:
    """Lightweight workflow step, resolved against the registry at run time."""

    id: str
    name: str = ""
    description: str = ""
    inputs: Optional[Dict[str, Any]] = None
    outputs: Optional[Dict[str, Any]] = None


WorkflowStep = Union[PrivacyPrimitive, OperationRef]


@dataclass
class Workflow:
    """An ordered sequence of steps executed as one unit."""

    id: str
    name: str
    description: str = ""
    operations: List[WorkflowStep] = field(default_factory=list)
    inputs: Optional[List[str]] = None
    outputs: Optional[List[str]] = None

    def __post_init__(self) -> None:
        # Derived from the declared schemas of the first and last step
        if self.inputs is None:
            first = self.operations[0] if self.operations else None
            self.inputs = list((first.inputs or {}).keys()) if first else []
        if self.outputs is None:
            last = self.operations[-1] if self.operations else None
            self.outputs = list((last.outputs or {}).keys()) if last else []

    @property
    def operation_ids(self) -> List[str]:
        return [op.id for op in self.operations]


@dataclass
class PrimitiveMetadata:
    """Registry-owned projection of a primitive's descriptive fields."""

    id: str
    name: str
    category: str
    version: str
    description: str
    author: str
    tags: List[str]
    dependencies: List[str]
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    @classmethod
    def from_primitive(cls, primitive: PrivacyPrimitive) -> "PrimitiveMetadata":
        return cls(
            id=primitive.id,
            name=primitive.name,
            category=primitive.category,
            version=primitive.version,
            description=primitive.description,
            author=primitive.author,
            tags=list(dict.fromkeys(primitive.tags)),
            dependencies=list(primitive.dependencies),
        )


@dataclass
class ExecutionResult:
    """Result of a workflow run."""

    success: bool
    outputs: PrivacyOutput
    execution_time_ms: int
    operations_executed: int
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "outputs": self.outputs,
            "execution_time_ms": self.execution_time_ms,
            "operations_executed": self.operations_executed,
            "error": self.error,
        }


@dataclass
class ChainResult:
    """Result of an ad hoc operation chain."""

    results: List[PrivacyOutput]
    final_output: PrivacyOutput
    total_operations: int
