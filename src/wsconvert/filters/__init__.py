"""Category filters applied to each normalized line."""

from .bank import FilterBank
from .controls import ControlMode
from .wrappers import EmphasisMode, Wrappers

__all__ = ["ControlMode", "EmphasisMode", "FilterBank", "Wrappers"]
