"""
Role Hierarchy Builder
======================

Turns the flat list of CRM roles into a forest and assigns each role its
depth ("level") from the nearest root. Level 0 is the most senior.

Malformed data never raises:
- a `reports_to_id` naming a role outside the input makes the role a root
- roles caught in a cycle are never reached from a root; they keep level 0
  and stay in the map as isolated roots
The visited set bounds the traversal to one visit per role.
"""

from collections import deque
from typing import Dict, Iterable, List

from crm_access.core.logging import get_logger
from crm_access.schemas.directory import DirectoryRole
from crm_access.schemas.permissions import HierarchyNode

logger = get_logger(__name__)


def build_role_hierarchy(roles: Iterable[DirectoryRole]) -> Dict[str, HierarchyNode]:
    """
    Build the hierarchy map for a set of roles.

    Args:
        roles: Roles of one organization, in any order

    Returns:
        Mapping of role id to node, in input order; each input role
        appears exactly once (the first occurrence of a duplicate id wins)
    """
    hierarchy: Dict[str, HierarchyNode] = {}
    for role in roles:
        if role.external_id in hierarchy:
            continue
        hierarchy[role.external_id] = HierarchyNode(
            role_id=role.external_id,
            display_label=role.display_label,
            reports_to=role.reports_to_id,
        )

    roots: List[str] = []
    for role_id, node in hierarchy.items():
        parent = hierarchy.get(node.reports_to) if node.reports_to else None
        if parent is None:
            roots.append(role_id)
        else:
            parent.children.append(role_id)

    visited = set()
    queue = deque((role_id, 0) for role_id in roots)

    while queue:
        role_id, level = queue.popleft()
        if role_id in visited:
            continue
        visited.add(role_id)

        node = hierarchy[role_id]
        node.level = level

        for child_id in node.children:
            if child_id not in visited:
                queue.append((child_id, level + 1))

    unreached = [role_id for role_id in hierarchy if role_id not in visited]
    if unreached:
        logger.warning("role_hierarchy_unreachable_roles", role_ids=unreached)

    return hierarchy


def roles_at_or_above(hierarchy: Dict[str, HierarchyNode], role_id: str) -> List[str]:
    """
    Ids of every role whose level is at most the given role's level.

    That is the role itself, its peers at the same depth, and every more
    senior depth. Empty when the role is not in the hierarchy.
    """
    base = hierarchy.get(role_id)
    if base is None:
        return []
    return [rid for rid, node in hierarchy.items() if node.level <= base.level]
