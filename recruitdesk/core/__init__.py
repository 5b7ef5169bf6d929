"""
Core business logic modules for RecruitDesk.

Submodules:
- exceptions: Error hierarchy
- state_machine: Status transition tables
- statistics: Client, job, application and dashboard rollups
- workflow: Stage mapping, application approval, resume score
- relationships: Id-array relationship helpers and validator
- email_templates: Placeholder substitution for candidate emails
"""
