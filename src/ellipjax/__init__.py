from . import checks
from . import jacobi
from . import precision
from . import sncndn
from . import sncndn_complex
from . import status
from . import validation

__all__ = [
    "checks",
    "jacobi",
    "precision",
    "sncndn",
    "sncndn_complex",
    "status",
    "validation",
]
