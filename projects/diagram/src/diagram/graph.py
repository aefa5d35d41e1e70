"""Breadth-first selection of the relationships drawn for one root entity."""

from collections import deque
from collections.abc import Iterable
from logging import getLogger

from diagram.types import DiagramGraph, Relationship

logger = getLogger(__name__)


def touches(relationship: Relationship, entity: str) -> bool:
    """Check whether the entity is either endpoint of the relationship."""
    return entity in (relationship.parent_table, relationship.child_table)


def related_entity(relationship: Relationship, entity: str) -> str:
    """Return the endpoint of the relationship opposite to the entity."""
    if relationship.parent_table == entity:
        return relationship.child_table
    return relationship.parent_table


def table_pair(relationship: Relationship) -> frozenset[str]:
    """Return the unordered pair of tables joined by the relationship."""
    return frozenset((relationship.parent_table, relationship.child_table))


def crosses_root_boundary(
    relationship: Relationship,
    root: str,
    other_roots: frozenset[str],
) -> bool:
    """Check whether the relationship belongs to another root's diagram.

    A relationship whose parent is another configured root is only drawn when
    its child is the active root, and the same holds the other way round.
    """
    if relationship.child_table != root and relationship.parent_table in other_roots:
        return True
    return relationship.parent_table != root and relationship.child_table in other_roots


def build_graph(
    root: str,
    relationships: Iterable[Relationship],
    *,
    included_tables: Iterable[str],
    exclusions: Iterable[str] = (),
    roots: Iterable[str] = (),
    max_depth: int,
) -> DiagramGraph:
    """Walk the relationship graph from the root, layer by layer.

    Args:
        root: Table the diagram starts from
        relationships: All known relationships, in load order
        included_tables: Tables allowed anywhere in the output; relationships
            touching any other table are ignored
        exclusions: Tables never reached from this root
        roots: Every configured root, this one included
        max_depth: Number of layers expanded around the root

    Returns:
        The selected edges in discovery order together with their endpoints

    """
    included = frozenset(included_tables)
    excluded = frozenset(exclusions)
    other_roots = frozenset(roots) - {root}

    candidates = [
        relationship
        for relationship in relationships
        if relationship.parent_table in included and relationship.child_table in included
    ]

    visited: set[str] = set()
    drawn: set[frozenset[str]] = set()
    edges: list[Relationship] = []
    queue: deque[tuple[str, int]] = deque([(root, 0)])

    while queue:
        entity, depth = queue.popleft()
        if depth >= max_depth:
            continue

        for relationship in candidates:
            if not touches(relationship, entity) or table_pair(relationship) in drawn:
                continue

            related = related_entity(relationship, entity)
            if related in excluded:
                logger.debug("%s: skipping excluded table %s", root, related)
                continue
            if crosses_root_boundary(relationship, root, other_roots):
                logger.debug(
                    "%s: skipping %s, it belongs to another root",
                    root,
                    relationship.foreign_key_name or relationship.ref_col_name,
                )
                continue
            if related in visited:
                continue

            edges.append(relationship)
            drawn.add(table_pair(relationship))
            visited.add(related)
            if related != root:
                queue.append((related, depth + 1))

    entities = dict.fromkeys(
        name for edge in edges for name in (edge.parent_table, edge.child_table)
    )
    logger.debug("%s: %d edges across %d tables", root, len(edges), len(entities))
    return DiagramGraph(root=root, edges=tuple(edges), entities=tuple(entities))
