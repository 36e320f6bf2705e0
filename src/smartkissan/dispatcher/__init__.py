from .dispatcher import RequestDispatcher, weather_query
from .factory import create_dispatcher
from .models import Envelope, Provenance
from .result import Err, Ok, Result

__all__ = [
    "Envelope",
    "Err",
    "Ok",
    "Provenance",
    "RequestDispatcher",
    "Result",
    "create_dispatcher",
    "weather_query",
]
