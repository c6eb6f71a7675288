# Road data loading and element parsing modules
from .elements import Node, Segment, parse_elements
from .overpass import OverpassClient, build_road_query
