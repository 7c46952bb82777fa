"""
User subsystem.

- user_models.py: User record
- user_directory.py: in-memory directory with username/email lookups
- user_api.py: validate-then-commit operations
"""
