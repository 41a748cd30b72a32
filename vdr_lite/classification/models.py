from enum import Enum


class Category(str, Enum):
    """Closed set of document categories; OTHER is the fallback and is never scored."""

    FINANCIAL = "financial"
    LEGAL = "legal"
    COMMERCIAL = "commercial"
    OPERATIONS = "operations"
    OTHER = "other"
