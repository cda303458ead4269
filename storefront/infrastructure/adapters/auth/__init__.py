from .hosted_auth_client import HostedAuthClient

__all__ = ["HostedAuthClient"]
