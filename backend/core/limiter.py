from slowapi import Limiter
from slowapi.util import get_remote_address

# Shared between main.py (exception handler) and the routers it throttles
limiter = Limiter(key_func=get_remote_address)
