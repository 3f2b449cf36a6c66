"""Adaptadores de recursos del servicio remoto.

Cada módulo traduce consultas tipadas a parámetros del transporte y el JSON
decodificado a registros del dominio.
"""

from adapters.nasa_sources.daily_picture import DailyPictureAdapter
from adapters.nasa_sources.neo_feed import NeoFeedAdapter
from adapters.nasa_sources.rover_imagery import RoverImageryAdapter

__all__ = [
    "DailyPictureAdapter",
    "NeoFeedAdapter",
    "RoverImageryAdapter",
]
