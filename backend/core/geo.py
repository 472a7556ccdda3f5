"""
Approximate distance used by the courier proximity checks.

Flat-earth approximation: Euclidean distance in degrees multiplied by
KM_PER_DEGREE (111 km). North-south distances are accurate to about 0.5%.
East-west distances are overestimated by 1/cos(latitude): around Gaza
(~31.5°N) that is about +17%. The 5 km nearby-task radius was tuned against
this approximation, so it is kept instead of a haversine distance.
"""
import math

from config import settings
from models.common import GeoPin


def approx_distance_km(a: GeoPin, b: GeoPin) -> float:
    return math.sqrt((a.lat - b.lat) ** 2 + (a.lng - b.lng) ** 2) * settings.KM_PER_DEGREE
