"""
Task subsystem.

Components:
- task_models.py: data structures (Task, TaskStatus, Priority, TaskUpdate)
- task_graph.py: in-memory task collection + dependency rules
- task_api.py: validate-then-commit operations used by the outside world
"""
