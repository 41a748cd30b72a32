"""Keyword-based advisory classification of a document before model analysis."""

from vdr_lite.classification.models import Category
from vdr_lite.config import constants

# Declaration order is the tie-break priority.
CATEGORY_KEYWORDS: dict[Category, tuple[str, ...]] = {
    Category.FINANCIAL: (
        "revenue", "profit", "income", "expense", "balance sheet", "cash flow",
        "audit", "financial statement", "budget", "forecast", "ebitda", "assets",
        "liabilities", "equity", "p&l", "quarterly", "earnings",
    ),
    Category.LEGAL: (
        "contract", "agreement", "liability", "indemnity", "warranty", "clause",
        "legal", "compliance", "regulation", "litigation", "dispute", "settlement",
        "jurisdiction", "court", "law",
    ),
    Category.COMMERCIAL: (
        "pricing", "price", "cost", "fee", "rate", "discount", "marketing", "sales",
        "customer", "client", "deal", "transaction", "purchase", "order", "invoice",
        "payment", "quotation",
    ),
    Category.OPERATIONS: (
        "process", "procedure", "workflow", "operation", "manual", "guide",
        "instruction", "training", "safety", "security", "maintenance", "equipment",
        "facility", "logistics", "supply chain",
    ),
}


def score_categories(filename: str, snippet: str) -> dict[Category, int]:
    """One point per listed keyword found anywhere in filename + snippet."""
    haystack = f"{filename} {snippet}".lower()
    return {
        category: sum(1 for keyword in keywords if keyword in haystack)
        for category, keywords in CATEGORY_KEYWORDS.items()
    }


def classify_document(filename: str, text: str) -> Category:
    """Classify a document from its filename and the start of its text.

    Only the first 300 characters of `text` are considered. Returns
    Category.OTHER when no keyword matches.
    """
    scores = score_categories(filename, text[: constants.CLASSIFIER_SNIPPET_LENGTH])
    best_category = Category.OTHER
    best_score = 0
    for category, score in scores.items():
        if score > best_score:
            best_category, best_score = category, score
    return best_category
