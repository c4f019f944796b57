from .base import BaseIntakeGateway
from .factory import get_gateway

__all__ = ["BaseIntakeGateway", "get_gateway"]
