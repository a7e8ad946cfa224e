from sahayata.core.config import Settings
from sahayata.repos.inmemory import InMemoryRepo


def build_repo(settings: Settings):
    """Pick the storage backend named in settings."""
    if settings.storage_backend == "memory":
        return InMemoryRepo()
    # motor is only imported when a real database is used
    from sahayata.repos.mongo import MongoRepo
    return MongoRepo.from_settings(settings)


__all__ = ["build_repo", "InMemoryRepo"]
