"""
Authorization, identity and session handling for RecruitDesk.

Submodules:
- permissions: Role/permission tables and lookups
- identity: Current user from session token claims
- session: Persisted tokens and UI selection
- guards: Loading/redirect/allow/deny decisions for pages and elements
"""
