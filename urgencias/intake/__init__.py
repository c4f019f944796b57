from .assembler import assemble_emergency, assemble_nurse, assemble_patient
from .factory import get_adapter
from .formatter import CuilInput, transition

__all__ = [
    "CuilInput",
    "assemble_emergency",
    "assemble_nurse",
    "assemble_patient",
    "get_adapter",
    "transition",
]
