# Graph construction and routing modules
from .geo import distance_m, bounding_box, BoundingBox
from .builder import (
    build_road_graph,
    find_nearest_node,
)
from .routing import (
    find_shortest_path,
    calculate_route_length,
    path_to_coordinates,
    calculate_route_metrics,
)
