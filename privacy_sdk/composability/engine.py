"""
Composability Engine

Executes single primitives, registered workflows and ad hoc chains. Steps
always run strictly in sequence: each step sees the merged outputs of the
steps before it.

Failure handling differs by entry point:
    - ``execute_operation`` and ``chain_operations`` propagate step failures.
    - ``execute_workflow`` captures them into an ``ExecutionResult`` that
      records how many steps had started.
"""

import time
from typing import Dict, List, Optional, Sequence

import structlog

from ..exceptions import OperationNotFoundError, WorkflowNotFoundError
from ..types import (
    ChainResult,
    ExecutionResult,
    PrivacyInput,
    PrivacyOutput,
    PrivacyPrimitive,
    Workflow,
    WorkflowStep,
)
from .registry import PrimitiveRegistry

logger = structlog.get_logger(__name__)

EXECUTION_TIME_KEY = "_execution_time"
OPERATION_ID_KEY = "_operation_id"


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class ComposabilityEngine:
    """Runs primitives against a registry it does not own."""

    def __init__(self, registry: PrimitiveRegistry) -> None:
        self.registry = registry
        self._history: Dict[str, ExecutionResult] = {}

    async def execute_operation(
        self, operation: PrivacyPrimitive, input: PrivacyInput
    ) -> PrivacyOutput:
        """
        Execute one primitive and tag its output.

        The returned dict carries ``_execution_time`` (ms) and
        ``_operation_id`` on top of the primitive's own fields.

        Raises:
            Exception: whatever the primitive raised, after logging it
        """
        start = time.perf_counter()
        try:
            result = await operation.execute(input)
        except Exception as e:
            logger.error(
                "Operation failed",
                id=operation.id,
                execution_time_ms=_elapsed_ms(start),
                error=str(e),
            )
            raise

        execution_time = _elapsed_ms(start)
        logger.debug("Operation executed", id=operation.id, execution_time_ms=execution_time)
        return {
            **(result or {}),
            EXECUTION_TIME_KEY: execution_time,
            OPERATION_ID_KEY: operation.id,
        }

    def _resolve(self, step: WorkflowStep) -> PrivacyPrimitive:
        # Registered primitive wins; an embedded primitive is the fallback
        primitive = self.registry.get(step.id)
        if primitive is not None:
            return primitive
        if isinstance(step, PrivacyPrimitive):
            return step
        raise OperationNotFoundError(step.id)

    async def execute_workflow(self, workflow_id: str, input: PrivacyInput) -> ExecutionResult:
        """
        Run a registered workflow to completion or first failure.

        Raises:
            WorkflowNotFoundError: If ``workflow_id`` is not registered.
                Step failures are never raised; they are returned.
        """
        workflow = self.registry.get_workflow(workflow_id)
        if workflow is None:
            raise WorkflowNotFoundError(workflow_id)

        start = time.perf_counter()
        operations_executed = 0
        current_input: PrivacyInput = dict(input)
        outputs: PrivacyOutput = {}

        try:
            for step in workflow.operations:
                primitive = self._resolve(step)
                operations_executed += 1
                step_output = await self.execute_operation(primitive, current_input)
                current_input = {**current_input, **step_output}
                outputs = {**outputs, **step_output}
        except Exception as e:
            execution_time = _elapsed_ms(start)
            logger.error(
                "Workflow execution failed",
                id=workflow_id,
                execution_time_ms=execution_time,
                operations_executed=operations_executed,
                error=str(e),
            )
            return ExecutionResult(
                success=False,
                outputs={},
                execution_time_ms=execution_time,
                operations_executed=operations_executed,
                error=str(e),
            )

        result = ExecutionResult(
            success=True,
            outputs=outputs,
            execution_time_ms=_elapsed_ms(start),
            operations_executed=operations_executed,
        )
        self._history[workflow_id] = result

        logger.info(
            "Workflow executed successfully",
            id=workflow_id,
            execution_time_ms=result.execution_time_ms,
            operations_executed=operations_executed,
        )
        return result

    async def chain_operations(
        self, operations: Sequence[PrivacyPrimitive], initial_input: PrivacyInput
    ) -> ChainResult:
        """Thread ``initial_input`` through ``operations``; failures propagate."""
        current_input: PrivacyInput = dict(initial_input)
        results: List[PrivacyOutput] = []

        for operation in operations:
            result = await self.execute_operation(operation, current_input)
            results.append(result)
            current_input = {**current_input, **result}

        return ChainResult(
            results=results,
            final_output=current_input,
            total_operations=len(operations),
        )

    def create_workflow_from_operations(
        self,
        workflow_id: str,
        name: str,
        description: str,
        operations: Sequence[WorkflowStep],
    ) -> Workflow:
        workflow = Workflow(
            id=workflow_id,
            name=name,
            description=description,
            operations=list(operations),
        )
        self.registry.register_workflow(workflow)
        return workflow

    def validate_workflow(self, workflow: Workflow) -> Dict[str, object]:
        """
        Check a workflow without running it.

        Returns:
            ``{"is_valid": bool, "errors": [str, ...]}``
        """
        errors: List[str] = []

        if not workflow.operations:
            errors.append("Workflow must have at least one operation")

        for step in workflow.operations:
            if self.registry.get(step.id) is None:
                errors.append(f"Operation not found in registry: {step.id}")

        return {"is_valid": not errors, "errors": errors}

    def get_execution_result(self, workflow_id: str) -> Optional[ExecutionResult]:
        return self._history.get(workflow_id)

    def get_all_execution_results(self) -> Dict[str, ExecutionResult]:
        return dict(self._history)

    def clear_execution_history(self) -> None:
        self._history.clear()
