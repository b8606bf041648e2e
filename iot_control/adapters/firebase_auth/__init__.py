from .client import FirebaseAuthClient, PROVIDER_MESSAGES

__all__ = ["FirebaseAuthClient", "PROVIDER_MESSAGES"]
