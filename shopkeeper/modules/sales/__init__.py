from .draft import SaleDraft
from .engine import CommitResult, SaleEngine

__all__ = ["SaleDraft", "SaleEngine", "CommitResult"]
