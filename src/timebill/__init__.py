"""timebill: log billable hours, bill them into invoices, render invoice documents."""

__version__ = "0.1.0"

_LAZY_EXPORTS = {
    "main": ("timebill.cli.main", "main"),
    "BillingLedger": ("timebill.domain.ledger", "BillingLedger"),
    "SettingsService": ("timebill.domain.settings", "SettingsService"),
    "layout_invoice": ("timebill.layout.engine", "layout_invoice"),
    "PDFRenderer": ("timebill.render.pdf", "PDFRenderer"),
}


# Exports resolve on first attribute access
def __getattr__(name):
    if name in _LAZY_EXPORTS:
        from importlib import import_module

        module_name, attribute = _LAZY_EXPORTS[name]
        return getattr(import_module(module_name), attribute)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
