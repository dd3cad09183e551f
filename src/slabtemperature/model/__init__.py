"""
The MODEL layer contains pure data structures.
It has NO knowledge of the GUI (Qt) or the solver loop.
It deals with parameters, boundaries and I/O.
"""
from slabtemperature.model.bc import ConvectiveBoundary, SlabFace
from slabtemperature.model.state import SlabConfig

__all__ = ["ConvectiveBoundary", "SlabConfig", "SlabFace"]
