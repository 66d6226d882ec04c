from ign_check.db.models.lookup_check import LookupCheck

__all__ = [
    "LookupCheck",
]
