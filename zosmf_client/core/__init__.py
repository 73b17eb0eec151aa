"""
Connection descriptor and argument validation for the z/OSMF client.
"""

from zosmf_client.core.connection import AuthType, ZosConnection, ZosConnectionFactory

__all__ = [
    "AuthType",
    "ZosConnection",
    "ZosConnectionFactory",
]
