"""Options controlling how element vertices are joined up by nodes."""

from dataclasses import dataclass

from ..geometry import tolerance


@dataclass
class NodeGenerationParameters:
    """
    Node generation options.

    Attributes:
        connection_tolerance: Vertices closer than this to an existing node reuse it
        delete_unused_nodes: Delete nodes left with no connected elements afterwards
    """
    connection_tolerance: float = tolerance.DISTANCE
    delete_unused_nodes: bool = False

    def __post_init__(self):
        if self.connection_tolerance < 0:
            raise ValueError(
                f"connection_tolerance must be non-negative, got {self.connection_tolerance}")
