# forum/services/lifecycle.py
"""
Post lifecycle state machine.

A post is in exactly one of three states:

    ACTIVE  --hide-->    HIDDEN
    HIDDEN  --restore--> ACTIVE
    ACTIVE | HIDDEN --remove--> REMOVED

REMOVED is terminal. Reports can also move an ACTIVE post to HIDDEN once the
report count reaches the configured threshold; that decision is evaluated by
the storage layer inside the same UPDATE that bumps the counter, with the
CASE expression built by `auto_hide_clause`.
"""
from enum import Enum

from sqlalchemy import and_, case

from forum.core.exceptions import TerminalStateConflict

ADMIN_TAG = "ADMIN"
OP_TAG = "OP"


class PostState(str, Enum):
    ACTIVE = "active"
    HIDDEN = "hidden"
    REMOVED = "removed"


class PostAction(str, Enum):
    HIDE = "hide"
    RESTORE = "restore"
    REMOVE = "remove"


_TRANSITIONS = {
    (PostState.ACTIVE, PostAction.HIDE): PostState.HIDDEN,
    (PostState.HIDDEN, PostAction.RESTORE): PostState.ACTIVE,
    (PostState.ACTIVE, PostAction.REMOVE): PostState.REMOVED,
    (PostState.HIDDEN, PostAction.REMOVE): PostState.REMOVED,
}


def ensure_not_removed(state: PostState, operation: str = "modify") -> None:
    """Raise TerminalStateConflict for any operation on a removed post."""
    if state is PostState.REMOVED:
        raise TerminalStateConflict(f"Cannot {operation} a removed post")


def next_state(state: PostState, action: PostAction) -> PostState:
    ensure_not_removed(state, action.value)
    try:
        return _TRANSITIONS[(state, action)]
    except KeyError:
        raise TerminalStateConflict(
            f"Cannot {action.value} a post that is {state.value}"
        ) from None


def auto_hide_clause(state_column, report_count_expr, threshold: int):
    """SQL expression for a post's state once a report brings it to `report_count_expr`.

    Only an ACTIVE post is hidden, and only when the count reaches the
    threshold; hidden posts stay hidden and removed posts never match the
    report UPDATE in the first place.
    """
    return case(
        (
            and_(
                state_column == PostState.ACTIVE.value,
                report_count_expr >= threshold,
            ),
            PostState.HIDDEN.value,
        ),
        else_=state_column,
    )


def removal_tag(is_admin: bool) -> str:
    return ADMIN_TAG if is_admin else OP_TAG


def edit_tag(is_admin: bool):
    """Audit marker stored for the last edit of a field; None for non-admin edits."""
    return ADMIN_TAG if is_admin else None
