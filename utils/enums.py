from enum import Enum, IntEnum, auto

class CellStatus(IntEnum):
    ACTIVE = 0
    LINKED = 1
    DIVERGED = 2
    CONVERGED = 3

    @property
    def resolved(self) -> bool:
        return self in (CellStatus.DIVERGED, CellStatus.CONVERGED)

class EvaluatorMode(Enum):
    AUTO = auto()
    NAIVE = auto()
    DEDUP = auto()
    GRID = auto()
