"""
Render Result - Data structure for rendered pages
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional


class SettleOutcome(Enum):
    """How the best-effort network idle wait ended"""
    SETTLED = "settled"
    TIMED_OUT = "timed_out"


@dataclass
class RenderResult:
    """Result of rendering a single URL"""
    url: str
    html: str
    settle: SettleOutcome = SettleOutcome.SETTLED
    status_code: Optional[int] = None
    response_time: float = 0.0
