from typing import List, Sequence

from .load_propagation import inbound_connections
from .models import ComponentConfig
from .profiles import normalize_type


CACHE_TYPES = {"cache", "redis", "cdn"}
DATA_STORE_TYPES = {"database", "postgresql", "mongodb", "elasticsearch"}
FRONT_DOOR_TYPES = {"api-gateway", "load-balancer", "nginx", "cdn"}


def review_architecture(components: Sequence[ComponentConfig]) -> List[str]:
    warnings: List[str] = []
    if not components:
        return warnings

    types = [normalize_type(component.type) for component in components]
    entry_points = [
        component for component in components if not inbound_connections(component, components)
    ]
    entry_types = {normalize_type(component.type) for component in entry_points}

    if not any(t in CACHE_TYPES for t in types):
        warnings.append("No cache tier detected; repeated reads hit the data stores directly.")

    if entry_types & DATA_STORE_TYPES:
        warnings.append("A data store is exposed as an entry point; add a service layer.")

    if len(entry_points) > 1 and not entry_types & FRONT_DOOR_TYPES:
        warnings.append("Multiple entry points without a gateway or load balancer.")

    for component in components:
        if component.scaling.min > component.scaling.max:
            warnings.append(f"{component.id}: scaling min exceeds max.")
        if normalize_type(component.type) == "microservice" and component.scaling.max <= 1:
            warnings.append(f"{component.id}: single instance service; potential single point of failure.")

    return warnings
