"""Drive reconstruction: quarters, possession and the per-row orchestrator."""

from .orchestrator import DriveReconstructor, reconstruct_drives
from .possession import Possession, infer_possession
from .quarter import resolve_quarter

__all__ = [
    "DriveReconstructor",
    "Possession",
    "infer_possession",
    "reconstruct_drives",
    "resolve_quarter",
]
