from dm_inspect.analysis.root_cause import (
    RootCauseResolver,
    RootCauseResult,
    compute_root_causes,
)

__all__ = ["RootCauseResolver", "RootCauseResult", "compute_root_causes"]
