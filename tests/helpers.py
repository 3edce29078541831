"""Shared test doubles."""

import asyncio
from typing import Any, Callable, Dict, List, Optional

from privacy_sdk import PrimitiveDefinition, RemoteResult


class FakeClock:
    """Millisecond clock advanced by hand."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class FakeInvoker:
    """
    Stand-in for the remote service.

    ``responses`` maps endpoint to a callable producing a RemoteResult from
    the payload. Tracks every call and the peak number in flight.
    """

    def __init__(
        self,
        responses: Optional[Dict[str, Callable[[Dict[str, Any]], RemoteResult]]] = None,
        delay: Callable[[Dict[str, Any]], float] = lambda payload: 0.0,
    ) -> None:
        self.responses = responses or {}
        self.delay = delay
        self.calls: List[tuple] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def invoke(self, endpoint: str, payload: Dict[str, Any]) -> RemoteResult:
        self.calls.append((endpoint, payload))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delay(payload))
            handler = self.responses.get(endpoint)
            if handler is None:
                return RemoteResult(success=False, error=f"No route for {endpoint}")
            return handler(payload)
        finally:
            self.in_flight -= 1

    def calls_to(self, endpoint: str) -> List[Dict[str, Any]]:
        return [payload for called, payload in self.calls if called == endpoint]


def make_primitive(
    primitive_id: str,
    handler: Optional[Callable[[Dict[str, Any]], Any]] = None,
    category: str = "test",
    **kwargs: Any,
) -> PrimitiveDefinition:
    return PrimitiveDefinition(
        id=primitive_id,
        name=kwargs.pop("name", primitive_id.replace("-", " ").title()),
        handler=handler or (lambda input: {f"{primitive_id}_done": True}),
        category=category,
        **kwargs,
    )
