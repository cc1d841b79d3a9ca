"""
Component tests package.

These tests validate BUSINESS RULES across the whole service:
- Filter ownership and visibility
- Sharing rules and favourite cleanup
- Ownership transfer by administrators

Repositories are small in-memory implementations so that several
operations can be chained against the same state.
"""
