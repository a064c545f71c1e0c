from __future__ import annotations
"""Lightweight asynchronous in-process event bus.

Gateway events (interactions, messages) are forwarded onto the bus by
`slashkit.bot.events.registry`, and the command handler subscribes to them.
Keeps the dispatcher independent from the discord client so it can be driven
directly in tests.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Coroutine, Dict, List, Optional, cast
import uuid

INTERACTION_CREATED = "InteractionCreated"
MESSAGE_CREATED = "MessageCreated"
BOT_STARTED = "BotStarted"


@dataclass(slots=True)
class Event:
    """Represents an event published on the internal bus.

    Attributes:
        type: Event name (e.g. "InteractionCreated").
        payload: Event data; gateway events carry the discord object itself
            under "interaction" or "message".
        context: Out-of-band metadata (trace IDs, user info, etc.).
        timestamp: UTC creation time.
        correlation_id: Unique id for tracing event flow.
    """
    type: str
    payload: Dict[str, Any]
    context: Dict[str, Any] = field(default_factory=lambda: cast(Dict[str, Any], {}))
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    correlation_id: str = field(default_factory=lambda: uuid.uuid4().hex)

Handler = Callable[[Event], Coroutine[Any, Any, None]]


class EventBus:
    """Simple async event bus.

    Handlers are awaited sequentially; if one raises it propagates upward.
    Wildcard handlers receive all events (used for logging/introspection).
    """
    def __init__(self):
        self._handlers: Dict[str, List[Handler]] = {}
        self._wildcard: List[Handler] = []

    def Subscribe(self, event_type: str, handler: Handler) -> None:
        """Register a handler for a specific event type.

        Example:
            async def on_interaction(event):
                await handler.handle_interaction(event.payload["interaction"])

            bus.Subscribe("InteractionCreated", on_interaction)
        """
        self._handlers.setdefault(event_type, []).append(handler)

    def Unsubscribe(self, event_type: str, handler: Handler) -> bool:
        """Remove a previously subscribed handler.

        Returns:
            bool: True if the handler was subscribed and has been removed.
        """
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def SubscribeAll(self, handler: Handler) -> None:
        """Register a wildcard handler that sees every event."""
        self._wildcard.append(handler)

    async def Publish(self, event: Event) -> None:
        """Publish a pre-built Event to matching handlers, then wildcards.

        Raises:
            RuntimeError: Wrapping the first handler exception.
        """
        try:
            for h in list(self._handlers.get(event.type, [])):
                await h(event)
            for h in list(self._wildcard):
                await h(event)
        except Exception as e:
            raise RuntimeError(f"Failed to publish event {event.type}: {e}") from e

    async def Emit(self, type: str, payload: Dict[str, Any], context: Optional[Dict[str, Any]] = None) -> Event:
        """Create and publish an Event in one call.

        Returns:
            Event: The created event instance for tracing/testing.

        Example:
            event = await bus.Emit("InteractionCreated", {"interaction": interaction})
        """
        try:
            ev = Event(type=type, payload=payload, context=context or {})
            await self.Publish(ev)
            return ev
        except Exception as e:
            raise RuntimeError(f"Failed to emit event {type}: {e}") from e
