# -*- coding: utf-8 -*-
"""
Drag-and-drop reordering as an explicit state machine.

    idle --DragStart--> dragging --DragOver--> hovering --Drop--> dropped --DragEnd--> idle

DragEnd before a Drop cancels the drag (back to idle, list untouched). Only
one drag is tracked at a time; a DragStart while dragging is ignored.
``transition`` is pure: (state, event) -> (next state, effect or None).
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Hashable, List, Optional, Sequence, Tuple

IDLE = "idle"
DRAGGING = "dragging"
HOVERING = "hovering"
DROPPED = "dropped"

ABOVE = "above"
BELOW = "below"
PLACEMENTS = (ABOVE, BELOW)


class DragDropError(ValueError):
    pass


@dataclass(frozen=True)
class DragState:
    phase: str = IDLE
    dragged_id: Optional[Hashable] = None
    target_id: Optional[Hashable] = None
    placement: Optional[str] = None


IDLE_STATE = DragState()


# ---- events

@dataclass(frozen=True)
class DragStart:
    item_id: Hashable


@dataclass(frozen=True)
class DragOver:
    target_id: Hashable
    placement: str


@dataclass(frozen=True)
class Drop:
    pass


@dataclass(frozen=True)
class DragEnd:
    pass


@dataclass(frozen=True)
class Reset:
    pass


# ---- effects

@dataclass(frozen=True)
class MoveItem:
    dragged_id: Hashable
    target_id: Hashable
    placement: str


def transition(state: DragState, event) -> Tuple[DragState, Optional[MoveItem]]:
    if isinstance(event, Reset):
        return IDLE_STATE, None

    if isinstance(event, DragStart):
        if state.phase in (DRAGGING, HOVERING):
            return state, None
        return DragState(phase=DRAGGING, dragged_id=event.item_id), None

    if isinstance(event, DragOver):
        if state.phase not in (DRAGGING, HOVERING):
            return state, None
        if event.placement not in PLACEMENTS:
            raise DragDropError(f"placement must be one of {PLACEMENTS}, got {event.placement!r}")
        return DragState(
            phase=HOVERING,
            dragged_id=state.dragged_id,
            target_id=event.target_id,
            placement=event.placement,
        ), None

    if isinstance(event, Drop):
        if state.phase != HOVERING or state.target_id == state.dragged_id:
            return IDLE_STATE, None
        effect = MoveItem(state.dragged_id, state.target_id, state.placement)
        return DragState(DROPPED, state.dragged_id, state.target_id, state.placement), effect

    if isinstance(event, DragEnd):
        return IDLE_STATE, None

    raise DragDropError(f"unknown event {event!r}")


def _identity(item):
    return item


def drop_index(
    order: Sequence[Any],
    dragged_id: Hashable,
    target_id: Hashable,
    placement: str,
    key: Callable[[Any], Hashable] = _identity,
) -> int:
    """
    Index the dragged item ends up at once it has been taken out of ``order``.
    Above the target -> target index; below -> target index + 1; minus one
    when the dragged item sat before that slot.
    """
    ids = [key(item) for item in order]
    try:
        from_index = ids.index(dragged_id)
        target_index = ids.index(target_id)
    except ValueError:
        raise DragDropError(f"{dragged_id!r} or {target_id!r} is not in the list")
    if placement not in PLACEMENTS:
        raise DragDropError(f"placement must be one of {PLACEMENTS}, got {placement!r}")

    index = target_index if placement == ABOVE else target_index + 1
    if from_index < index:
        index -= 1
    return index


def move_item(
    order: Sequence[Any],
    dragged_id: Hashable,
    target_id: Hashable,
    placement: str,
    key: Callable[[Any], Hashable] = _identity,
) -> List[Any]:
    """New list with the dragged item moved; ``order`` is left as is."""
    index = drop_index(order, dragged_id, target_id, placement, key)
    items = list(order)
    from_index = [key(item) for item in items].index(dragged_id)
    item = items.pop(from_index)
    items.insert(index, item)
    return items
