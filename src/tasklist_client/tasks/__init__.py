"""
Task subsystem.

Components:
- task_repository.py: maps list/create/complete/update/delete onto the remote `tasks` resource
"""
