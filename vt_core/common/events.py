# vt_core/common/events.py
"""
In-process event bus.

Handlers run synchronously in the publisher's thread, in subscription order,
inside whatever transaction the publisher holds. A handler that raises stops
delivery and the error reaches the publisher.

Published events:

    reminder.fired  (vt_core.reminders.events.REMINDER_FIRED)
        Once per reminder, when ReminderScheduler.fire consumes it.
        Payload (str values):
            reminder_id, dose_id, subject_id, account_id, message,
            fire_at      ISO 8601
            consumed_at  ISO 8601
        Subscribed by vt_core.notifications.subscribers (inbox entry).

Payloads carry ids and primitives only, so subscribers never import the
publishing app's models.
"""
from collections import defaultdict
from typing import Any, Callable, Dict, List

Payload = Dict[str, Any]
Handler = Callable[[Payload], None]

_handlers: Dict[str, List[Handler]] = defaultdict(list)


def subscribe(event_name: str):
    """
    Register the decorated function for `event_name`.

        @subscribe(REMINDER_FIRED)
        def on_reminder_fired(payload): ...
    """
    def _decorator(fn: Handler) -> Handler:
        _handlers[event_name].append(fn)
        return fn
    return _decorator


def unsubscribe(event_name: str, fn: Handler) -> None:
    if fn in _handlers.get(event_name, []):
        _handlers[event_name].remove(fn)


def publish(event_name: str, payload: Payload) -> None:
    for handler in list(_handlers.get(event_name, [])):
        handler(payload)
