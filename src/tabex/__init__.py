"""
tabex – streaming tabular export/import service.

Import path convention::

    from tabex.kernel.errors import InputError
    from tabex.application.saga import Saga
    from tabex.application.export import ExportConfig, ExportService
    from tabex.adapters.fastapi import create_app
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
