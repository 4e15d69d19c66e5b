from .steam_store_client import SteamStoreClient

__all__ = ["SteamStoreClient"]
