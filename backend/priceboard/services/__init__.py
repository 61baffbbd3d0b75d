"""Services Layer — async orchestration around the pure aggregation core.

Invariants:
    - AggregationStore is the only owner of AggregateState
    - FetchOrchestrator never touches state directly; it dispatches events

Design Decisions:
    - One class per concern (store, orchestrator, set catalog, board facade)
"""
