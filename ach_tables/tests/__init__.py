"""
ACH Tables Tests

Test suite for the ACH file / flat table conversion core:
- NACHA codes and addenda type tags
- File model validation, cloning and control recomputation
- Flat table schemas
- Flattening and reconstruction round trips
- Configuration and logging
"""
