"""Resolution and deletion engine for cleanctl.

Turns profile entries into a deduplicated deletion plan and executes
it under a confirmation mode.
"""
