"""Balancing diagnostics for reward catalogs."""

from .checklist import ChecklistIssue, run_checklist
from .spin_simulator import SimulationResult, SpinSimulator

__all__ = ["ChecklistIssue", "run_checklist", "SimulationResult", "SpinSimulator"]
