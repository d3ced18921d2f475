"""Backend of the CSV exploratory data analysis dashboard."""
from eda_backend.services.profiler import profile

__version__ = "1.0.0"

__all__ = ["profile", "__version__"]
