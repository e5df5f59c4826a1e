"""Domain layer for ledgerimport application."""

# Services are imported lazily: the database layer imports domain.entities,
# and the services import the database layer.
_SERVICES = {
    "AccountService": "ledgerimport.domain.account",
    "CategoryService": "ledgerimport.domain.category",
    "MerchantMappingService": "ledgerimport.domain.merchant",
    "CategorizationRuleService": "ledgerimport.domain.rules",
    "StatementImportService": "ledgerimport.domain.statement_import",
    "TransactionService": "ledgerimport.domain.transaction",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
