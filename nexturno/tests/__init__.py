"""
Test suite for the rotation core.

Focus areas:
- Session factory output
- Invariant checking
- Reducer purity, rejections and undo
- Persistence round trip and staleness
"""
