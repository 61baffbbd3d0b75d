"""Core Layer — pure domain logic, no IO, no async, no network.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/ or schemas/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: the reducer is the only
      place AggregateState changes, the shell only dispatches events
"""
