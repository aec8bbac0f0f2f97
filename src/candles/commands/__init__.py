"""CLI command implementations for candles.

Each command module provides:
- Configuration loading and validation
- Command execution logic
- Integration with core library functions
"""

from candles.commands.analyze import (
    AnalysisReport,
    load_analysis_config,
    run_analysis,
)

__all__ = [
    "AnalysisReport",
    "load_analysis_config",
    "run_analysis",
]
