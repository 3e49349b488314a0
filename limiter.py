from slowapi import Limiter
from slowapi.util import get_remote_address

from settings import Settings

limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[Settings.from_env().inspect_rate_limit],
)
