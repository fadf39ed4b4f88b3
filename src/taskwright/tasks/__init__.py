"""
Task subsystem.

Components:
- task_models.py: data structures (Task, Option)
- registry.py: task/option registration, lookup, argv parsing and execution
"""
