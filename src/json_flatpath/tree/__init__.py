"""Tree subpackage for the flattener's input node model.

Re-exports the public API for the tree module:
- JsonNode: frozen dataclass representing a node in a parsed JSON tree
- NodeKind: StrEnum of container and scalar kinds
- MISSING: sentinel node substituted for empty containers
- NodeBuilder: converts parsed Python values into a JsonNode tree
- loads: parse JSON text straight into a JsonNode tree
"""

from json_flatpath.tree.builder import NodeBuilder, loads
from json_flatpath.tree.nodes import MISSING, JsonNode, NodeKind

__all__ = ["MISSING", "JsonNode", "NodeBuilder", "NodeKind", "loads"]
