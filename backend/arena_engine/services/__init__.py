"""
Services Layer

Pure scheduling-engine logic that:
- Accepts typed records (participants, matches, schedule definitions, slots)
- Returns typed records
- Does NOT depend on HTTP request/response objects
- Does NOT persist anything; the caller owns storage
"""
