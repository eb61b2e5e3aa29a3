"""
User Use Cases
"""

from .load_me_use_case import LoadMeUseCase
from .dtos import MeResponse

__all__ = ["LoadMeUseCase", "MeResponse"]
