"""
Core application engine for orchestrating a run.

This package contains the primary logic. The `Orchestrator` acts as the
run coordinator, delegating configuration staging to the `ConfigResolver`
and directory lifetime to `working_directory`.
"""
