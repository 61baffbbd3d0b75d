"""Pydantic Schemas — validation at the system boundary.

Invariants:
    - catalog.py validates payloads coming FROM the card catalog
    - board.py validates requests and shapes responses of the HTTP API

Design Decisions:
    - Separate from core/records.py: schemas are wire contracts, records are domain values
"""
