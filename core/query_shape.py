from enum import Enum


class ResultShape(str, Enum):
    """
    The authoritative shape of an aggregate answer.
    """

    SCALAR = "scalar"
    GROUPED = "grouped"

    # -----------------------------
    # Semantic helpers (SAFE)
    # -----------------------------
    def is_grouped(self) -> bool:
        return self is ResultShape.GROUPED

    def is_scalar(self) -> bool:
        return self is ResultShape.SCALAR
