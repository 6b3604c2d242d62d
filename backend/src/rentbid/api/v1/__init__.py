"""API v1 routers."""

from rentbid.api.v1 import auth, biddings

__all__ = ["auth", "biddings"]
