"""Desktop simulator for Wedding Run."""

from .input import SimulatedButton
from .window import SimulatorWindow, WindowConfig

__all__ = ["SimulatedButton", "SimulatorWindow", "WindowConfig"]
