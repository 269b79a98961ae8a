from dataclasses import dataclass
import numpy as np
from typing import Optional

@dataclass(frozen=True)
class FrameEvent:
    data: np.ndarray    # (H, W, 3) uint8 pixels
    width: int
    height: int
    seq: int            # view generation number
    iteration: int      # global iteration the frame reflects

@dataclass(frozen=True)
class LogEvent:
    message: str
    level: Optional[str]
