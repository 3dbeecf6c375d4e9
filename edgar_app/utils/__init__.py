"""
Utility functions module.

Date Semantics:
- Dates travel as base-10 integers of the form YYYYMMDD
- The integer 0 is the sentinel for "no date chosen"
- A persisted 0 is always read back as unset, never as a real date
"""
