"""
Date Fallback

Local date formatting that keeps working whichever date backend the host
has. Providers are probed once in priority order; the best one that
initializes wins, and a pure-arithmetic provider guarantees a result when
nothing else does.

Architecture:
- base_provider.py: Provider contract and InitResult
- cldr_provider.py / tzlocal_provider.py / stdlib_provider.py / fallback_provider.py
- provider_registry.py: Ordered, validated provider set
- probe.py / selector.py: Isolated probing and deterministic selection
- shim.py / cldr_data.py: ``Cldr`` compatibility global
- runtime.py: Initialization pass and process-wide runtime
- facade.py / uid.py: The stable date API
- config.py / logger.py / events.py / diagnostics.py: Ambient support

Usage:
    from datefallback.facade import DateFacade
    from datefallback.runtime import FallbackRuntime

    dates = DateFacade(FallbackRuntime())
    dates.format_date("2023-10-15")     # "October 15, 2023"
    dates.format_uid("2023-10-15")      # "10-15-2023"
    dates.is_daily_note_uid("02-30-2023")   # False
"""

__version__ = "1.0.0"
