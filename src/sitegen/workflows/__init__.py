from .build_workflow import BuildResult, BuildWorkflow

__all__ = [
    "BuildResult",
    "BuildWorkflow",
]
