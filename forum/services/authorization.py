# forum/services/authorization.py
"""
Edit/delete permission predicates.

Both the pre-flight permission checks exposed by the API and the mutating operations of
ForumPostService call these functions, so the two can never disagree.
"""
from forum.services.lifecycle import PostState


def _is_removed(post) -> bool:
    return PostState(post.state) is PostState.REMOVED


def is_author(post, actor_id: int) -> bool:
    return actor_id is not None and post.author_id == actor_id


def can_delete(post, actor_id: int, is_admin: bool) -> bool:
    if _is_removed(post):
        return False
    return bool(is_admin) or is_author(post, actor_id)


def can_edit(post, actor_id: int, is_admin: bool) -> bool:
    if _is_removed(post):
        return False
    # A locked post (edited by an admin) stays editable by admins only
    if post.locked:
        return bool(is_admin)
    return bool(is_admin) or is_author(post, actor_id)
