"""
Shared slowapi limiter, attached to ``app.state`` in ``app.main``.
"""
from slowapi import Limiter

from app.features.users.dependencies import get_authorization_header


limiter = Limiter(key_func=get_authorization_header)
