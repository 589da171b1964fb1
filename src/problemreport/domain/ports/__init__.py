"""Domain ports (interfaces/protocols)."""

from problemreport.domain.ports.color_mode import ColorModeSetting
from problemreport.domain.ports.output import OutputSink

__all__ = [
    "ColorModeSetting",
    "OutputSink",
]
