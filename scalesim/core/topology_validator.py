from __future__ import annotations

from collections import defaultdict, deque
from typing import Dict, List, Sequence, Set

from .models import CONNECTION_TYPES, ComponentConfig


def _detect_cycle(node_id: str, adjacency: Dict[str, List[str]], visiting: Set[str], visited: Set[str]) -> bool:
    visiting.add(node_id)
    for neighbor in adjacency.get(node_id, []):
        if neighbor in visiting:
            return True
        if neighbor not in visited:
            if _detect_cycle(neighbor, adjacency, visiting, visited):
                return True
    visiting.remove(node_id)
    visited.add(node_id)
    return False


def validate_topology(components: Sequence[ComponentConfig]) -> Dict[str, object]:
    """Strict checks the simulation engine itself tolerates.

    Errors flag references the engine would silently ignore; warnings flag
    shapes that simulate fine but usually indicate a drawing mistake.
    """
    errors: List[str] = []
    warnings: List[str] = []

    if not components:
        return {"valid": True, "errors": [], "warnings": ["Topology has no components."]}

    ids = [component.id for component in components]
    if any(not component_id for component_id in ids):
        errors.append("Each component must include a non-empty id.")
    duplicates = sorted({component_id for component_id in ids if ids.count(component_id) > 1})
    for component_id in duplicates:
        errors.append(f"Duplicate component id: {component_id}.")

    known = set(ids)
    adjacency: Dict[str, List[str]] = defaultdict(list)
    indegree: Dict[str, int] = {component_id: 0 for component_id in known}

    for component in components:
        for connection in component.connections:
            if connection.source and connection.source != component.id:
                errors.append(f"{component.id}: connection source {connection.source} does not match its owner.")
            if connection.target not in known:
                errors.append(f"{component.id}: connection references unknown component {connection.target}.")
                continue
            if connection.target == component.id:
                errors.append(f"{component.id}: self-referential connections are not allowed.")
                continue
            if connection.type not in CONNECTION_TYPES:
                errors.append(f"{component.id}: unknown connection type {connection.type}.")
            if not 0 <= connection.weight <= 1:
                errors.append(f"{component.id}: connection weight must be between 0 and 1.")
            adjacency[component.id].append(connection.target)
            indegree[connection.target] += 1

    visited: Set[str] = set()
    for component_id in indegree:
        if component_id not in visited:
            if _detect_cycle(component_id, adjacency, set(), visited):
                warnings.append("Topology contains cycles; path latency ignores back edges.")
                break

    entry_points = [component_id for component_id, degree in indegree.items() if degree == 0]
    if not entry_points:
        warnings.append("Topology has no entry point; every component receives derived load.")
    else:
        reachable: Set[str] = set()
        queue = deque(entry_points)
        while queue:
            node_id = queue.popleft()
            if node_id in reachable:
                continue
            reachable.add(node_id)
            for neighbor in adjacency.get(node_id, []):
                if neighbor not in reachable:
                    queue.append(neighbor)
        unreachable = sorted(known - reachable)
        if unreachable:
            warnings.append(f"Components unreachable from any entry point: {', '.join(unreachable)}.")

    return {
        "valid": len(errors) == 0,
        "errors": sorted(set(errors)),
        "warnings": sorted(set(warnings)),
    }
