"""
Scheduling Services Module

This module provides core business logic for appointment scheduling:
- Value objects (models.py)
- Working hours and breaks (availability.py)
- Overlap detection and single-occurrence validation (overlap.py)
- Recurrence expansion (recurrence.py)
- Slot generation and suggestions (slots.py)
- Recurring conflict resolution (resolver.py)
- Settings and exceptions (config.py, exceptions.py)
"""
