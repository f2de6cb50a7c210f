"""Workflow orchestration package for the student folder sorter.

This package contains the components that run a sort:
- SortOrchestrator: Central coordinator of the sort workflow.
- SortLogger: Structured logging of a run to a timestamped log file.
- ResultWriter: Batched append of the found and not-found output lists.
"""

from foldersort.orchestration.result_writer import ResultWriter
from foldersort.orchestration.sort_logger import SortLogger
from foldersort.orchestration.sort_orchestrator import SortOrchestrator

__all__ = ["ResultWriter", "SortLogger", "SortOrchestrator"]
