# Created by Matthew Valancy
# Copyright 2026 Valpatel Software LLC
# Licensed under AGPL-3.0 — see LICENSE for details.
"""Message dispatch tables and the directory-driven broadcast helper.

Each behavior unit owns a ``MessageDispatcher`` mapping intent labels to
handler callables.  When a unit polls an envelope it hands it to
``handle``: unknown labels are dropped silently, and any exception raised
by a handler (a malformed position payload included) is logged and
swallowed so that the tick and the agent carry on.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Iterable

from loguru import logger

from .envelope import RETREATING, Envelope, IntentKind

if TYPE_CHECKING:
    from horde.simulation.directory import AgentDirectory
    from horde.simulation.enemy_state import EnemyState
    from horde.simulation.position import Position

    from .mailbox import PostOffice

Handler = Callable[..., None]


class MessageDispatcher:
    """Label -> handler table for one behavior unit."""

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {}

    def register(self, label: str, handler: Handler) -> None:
        self._handlers[label] = handler

    def handles(self, label: str) -> bool:
        return label in self._handlers

    @property
    def labels(self) -> list[str]:
        return list(self._handlers)

    def handle(self, envelope: Envelope | None, *context: Any) -> bool:
        """Run the handler registered for ``envelope.label``.

        Any *context* arguments are passed to the handler ahead of the
        envelope, so a unit can register plain methods taking
        ``(agent, envelope)``.  Returns True only when a handler ran to
        completion.
        """
        if envelope is None:
            return False
        handler = self._handlers.get(envelope.label)
        if handler is None:
            return False
        try:
            handler(*context, envelope)
        except ValueError as e:
            # Malformed payload: abort the transition, stay in the current unit
            logger.warning(f"Dropping {envelope.label} from {envelope.sender_id}: {e}")
            return False
        except Exception:
            logger.exception(f"Handler for {envelope.label} from {envelope.sender_id} failed")
            return False
        return True


def broadcast_alert(
    directory: AgentDirectory,
    post_office: PostOffice,
    sender_id: str,
    label: str,
    target_states: Iterable[EnemyState],
    position: Position | None,
    kind: IntentKind = IntentKind.INFORM,
) -> list[str]:
    """Send *label* to every agent advertising one of *target_states*.

    The sender is never among the recipients.  For ``RETREATING`` the
    payload is the sender's own id; for every other label it is the
    stringified *position*.

    Returns the recipient ids addressed (possibly empty).
    """
    if label == RETREATING:
        payload = sender_id
    elif position is None:
        logger.debug(f"{sender_id}: no position for {label}, broadcast skipped")
        return []
    else:
        payload = str(position)

    recipients: list[str] = []
    seen: set[str] = set()
    for entry in directory.find_by_states(target_states):
        if entry.agent_id == sender_id or entry.agent_id in seen:
            continue
        seen.add(entry.agent_id)
        recipients.append(entry.agent_id)

    if not recipients:
        logger.debug(f"{sender_id}: {label} found no recipients")
        return recipients

    envelope = Envelope(sender_id=sender_id, label=label, payload=payload, kind=kind)
    post_office.send(envelope, recipients)
    return recipients
