from .client import DesignCreated, DesignServiceClient
from .tools import DesignTools

__all__ = ["DesignCreated", "DesignServiceClient", "DesignTools"]
