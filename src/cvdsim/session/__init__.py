"""
session
=======

Interactive orchestration.

This subpackage provides:
- SimulationSession : selection state (mode, algorithm, strength) plus
  cancellable renders of a loaded image.
- FrameStore / Frame : atomic publication of completed renders.
"""

from .frames import Frame, FrameStore
from .simulation_session import SimulationSession

__all__ = ["Frame", "FrameStore", "SimulationSession"]
