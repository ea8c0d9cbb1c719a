"""SQLAlchemy Base with every model registered."""
from hotelbook.models.base.base_model import Base


def import_models() -> None:
    """Import all models to register them with SQLAlchemy."""
    import hotelbook.models  # noqa: F401


import_models()

__all__ = ["Base", "import_models"]
