from __future__ import annotations

from typing import List, Sequence

from .models import ComponentConfig, ComponentConnection, LoadPattern
from .profiles import connection_multiplier


MULTIPLIER_MODES = ("first", "weighted")


def inbound_connections(
    component: ComponentConfig, all_components: Sequence[ComponentConfig]
) -> List[ComponentConnection]:
    return [
        connection
        for other in all_components
        for connection in other.connections
        if connection.target == component.id
    ]


def _weighted_multiplier(connections: Sequence[ComponentConnection]) -> float:
    total_weight = sum(max(connection.weight, 0.0) for connection in connections)
    if total_weight == 0:
        return sum(connection_multiplier(c.type) for c in connections) / len(connections)
    return sum(
        connection_multiplier(connection.type) * max(connection.weight, 0.0) / total_weight
        for connection in connections
    )


def incoming_load(
    component: ComponentConfig,
    all_components: Sequence[ComponentConfig],
    load: LoadPattern,
    multiplier_mode: str = "first",
) -> float:
    """Estimate the request rate arriving at ``component``.

    Components without inbound connections are entry points and receive the
    full external rate. Otherwise the rate is scaled by the mean inbound
    weight and by a connection-type multiplier. With ``multiplier_mode``
    ``"first"`` the multiplier comes from the first inbound connection only;
    ``"weighted"`` blends every inbound connection's multiplier by weight.
    """
    connections = inbound_connections(component, all_components)
    if not connections:
        return load.requests_per_second

    average_weight = sum(connection.weight for connection in connections) / len(connections)
    if multiplier_mode == "weighted":
        multiplier = _weighted_multiplier(connections)
    else:
        multiplier = connection_multiplier(connections[0].type)

    return load.requests_per_second * average_weight * multiplier
