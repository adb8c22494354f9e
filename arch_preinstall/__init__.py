"""Arch Linux pre-install workflow (guarded, operator-attended).

Core design goals:
- Simulate by default; live runs confirm every irreversible command
- One linear session, aborted as a whole on the first fatal failure
- Explicit in-memory provisioning state, no resume
- Every byte of output mirrored to the session logs
"""

__all__ = []
